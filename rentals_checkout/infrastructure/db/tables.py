from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, UniqueConstraint, func

metadata = MetaData()

payment_reconciliations = Table(
    "payment_reconciliations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", String(32), nullable=False),
    Column("idem_key", String(128), nullable=False),
    Column("request_hash", String(64), nullable=False),
    Column("outcome", String(32), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("scope", "idem_key", name="uq_payment_reconciliations_scope_key"),
)
