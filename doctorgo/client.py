"""Async HTTP client for the DoctorGo API.

Thin wrappers over the documented endpoints; JSON bodies go out and come
back in camelCase exactly as the server speaks them.
"""
import httpx

DEFAULT_TIMEOUT = 3.0


class DoctorGoAPIError(Exception):
    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None):
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class DoctorGoClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self.token: str | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self._client.aclose()

    def _headers(self, request_id: str | None) -> dict:
        headers = {}
        if request_id:
            headers["X-Request-Id"] = request_id
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _call(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        params: dict | None = None,
        request_id: str | None = None,
    ):
        resp = await self._client.request(
            method,
            path,
            json=payload,
            params={k: v for k, v in (params or {}).items() if v is not None},
            headers=self._headers(request_id),
        )
        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            raise DoctorGoAPIError(
                resp.status_code,
                body.get("code") or "HTTP_ERROR",
                body.get("error") or resp.text,
                body.get("details"),
            )
        if resp.content:
            return resp.json()
        return {}

    # -------- PROVIDERS --------

    async def search_providers(self, location=None, specialty=None, q=None, sort=None, page=1, limit=20):
        params = {"location": location, "specialty": specialty, "q": q, "sort": sort, "page": page, "limit": limit}
        return await self._call("GET", "/providers", params=params)

    async def get_provider(self, provider_id: str):
        return await self._call("GET", f"/providers/{provider_id}")

    # -------- BOOKINGS --------

    async def create_booking(self, provider_id: str, slot_id: str, user_id: str, payment_token: str | None = None):
        payload = {"providerId": provider_id, "slotId": slot_id, "userId": user_id}
        if payment_token:
            payload["paymentToken"] = payment_token
        return await self._call("POST", "/bookings", payload)

    async def user_bookings(self, user_id: str):
        return (await self._call("GET", f"/bookings/user/{user_id}"))["bookings"]

    async def get_booking(self, booking_id: str):
        return await self._call("GET", f"/bookings/{booking_id}")

    # -------- QUEUE --------

    async def join_queue(self, provider_id: str, user_id: str):
        return await self._call("POST", "/queue/join", {"providerId": provider_id, "userId": user_id})

    async def queue_status(self, token: str):
        return await self._call("GET", f"/queue/{token}/status")

    # -------- PAYMENTS --------

    async def sandbox_payment(self, booking_id: str, amount: float):
        return await self._call("POST", "/payments/sandbox", {"bookingId": booking_id, "amount": amount})

    async def receipt(self, payment_token: str):
        return await self._call("GET", f"/receipts/{payment_token}.json")

    # -------- RECOMMENDATIONS --------

    async def recommend(self, symptoms_text: str):
        return (await self._call("POST", "/recommend", {"symptomsText": symptoms_text}))["recommendations"]

    # -------- AUTH --------

    async def login(self, email: str, password: str):
        result = await self._call("POST", "/auth/login", {"email": email, "password": password})
        self.token = result["token"]
        return result["user"]

    async def register(self, email: str, password: str, first_name: str, last_name: str, phone: str | None = None):
        payload = {"email": email, "password": password, "firstName": first_name, "lastName": last_name}
        if phone:
            payload["phone"] = phone
        result = await self._call("POST", "/auth/register", payload)
        self.token = result["token"]
        return result["user"]

    async def me(self):
        return (await self._call("GET", "/auth/me"))["user"]

    async def update_profile(self, user_id: str, **updates):
        return (await self._call("PUT", f"/users/{user_id}", updates))["user"]

    # -------- PROVIDER PANEL --------

    async def invite_next(self, provider_id: str):
        return await self._call("POST", "/provider/queue/invite-next", {"providerId": provider_id})

    async def postpone(self, token: str):
        return await self._call("POST", "/provider/queue/postpone", {"token": token})

    async def complete(self, token: str):
        return await self._call("POST", "/provider/queue/complete", {"token": token})

    async def cancel_queue_entry(self, token: str):
        return await self._call("DELETE", f"/provider/queue/{token}")

    async def provider_queue(self, provider_id: str):
        return (await self._call("GET", f"/provider/{provider_id}/queue"))["queue"]

    async def set_availability(self, provider_id: str, slots: list[dict]):
        return await self._call("PUT", f"/provider/{provider_id}/availability", {"slots": slots})

    async def get_availability(self, provider_id: str):
        return (await self._call("GET", f"/provider/{provider_id}/availability"))["slots"]
