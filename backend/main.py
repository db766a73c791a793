import uvicorn
from relay_server.app import create_app
from relay_server.config import load_settings_or_exit

settings = load_settings_or_exit()

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")
