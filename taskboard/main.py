# taskboard/main.py  (ASGI entry point: uvicorn taskboard.main:app)
from dotenv import load_dotenv

# load the root .env before settings and the engine are built
load_dotenv()

from taskboard.backend.main import app as app  # noqa: E402
