from locust import HttpUser, between, task


class CheckoutUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def on_start(self):
        """
        Called when a Locust user starts.
        Builds the checkout payload used by every booking task.
        """
        self.payload = {
            "property_id": "prop-001",
            "check_in": "2026-03-01",
            "check_out": "2026-03-08",
            "guest_count": 2,
            "payment_method": "yape",
        }

    @task(3)
    def get_quote(self):
        """Quote for the demo property with the default one-week stay."""
        self.client.get(
            "/api/v1/properties/prop-001/quote",
            name="/api/v1/properties/[id]/quote",
        )

    @task
    def checkout(self):
        """
        Task to simulate a full checkout.
        It sends a POST request to the /api/v1/checkout endpoint.
        """
        self.client.post(
            "/api/v1/checkout",
            json=self.payload,
            name="/api/v1/checkout",  # Group all requests under this name in the stats
        )
