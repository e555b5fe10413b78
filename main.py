import uvicorn

from mijikaku.app_factory import create_app
from mijikaku.config import settings

# Create FastAPI app
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port)
