import os
from dotenv import load_dotenv

load_dotenv()

# Rest timer
TICK_INTERVAL_S = float(os.getenv("REST_TIMER_TICK_S", "1.0"))
URGENT_THRESHOLD_S = int(os.getenv("REST_TIMER_URGENT_S", "10"))
ADJUST_STEP_S = int(os.getenv("REST_TIMER_ADJUST_STEP_S", "10"))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
RELOAD = os.getenv("RELOAD", "true").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()
