import os

SERVICE_NAME = "doctorgo"

# Simulated network latency, applied before every service call
MIN_LATENCY_MS = int(os.getenv("DOCTORGO_MIN_LATENCY_MS") or "200")
MAX_LATENCY_MS = int(os.getenv("DOCTORGO_MAX_LATENCY_MS") or "800")

# ---- Queue ----
MINUTES_PER_PATIENT = int(os.getenv("DOCTORGO_MINUTES_PER_PATIENT") or "15")
QUEUE_ADVANCE_PROBABILITY = float(os.getenv("DOCTORGO_QUEUE_ADVANCE_PROBABILITY") or "0.3")

# ---- Search ----
DEFAULT_PAGE_SIZE = int(os.getenv("DOCTORGO_DEFAULT_PAGE_SIZE") or "20")
MAX_PAGE_SIZE = 100

# ---- Recommendations ----
MAX_RECOMMENDATIONS = 3
DEFAULT_SPECIALTY = "General Practice"

# ---- Payments ----
PAYMENT_CURRENCY = "USD"
SANDBOX_CARD_BRAND = "Visa"
SANDBOX_CARD_LAST4 = "4242"

# ---- HTTP ----
RATE_LIMIT_PER_MINUTE = int(os.getenv("DOCTORGO_RATE_LIMIT_PER_MINUTE") or "120")

EVENT_LOG_LIMIT = int(os.getenv("DOCTORGO_EVENT_LOG_LIMIT") or "1000")

JWT_SECRET = os.getenv("JWT_SECRET") or "doctorgo-sandbox-secret"
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM") or "HS256"

LOG_LEVEL = os.getenv("DOCTORGO_LOG_LEVEL") or "INFO"

HOST = os.getenv("DOCTORGO_HOST") or "127.0.0.1"
PORT = int(os.getenv("DOCTORGO_PORT") or "8000")
