# Entry point for uvicorn: `uvicorn stockdesk.asgi:app`
from dotenv import load_dotenv

from stockdesk.main import create_app

load_dotenv()

app = create_app()
