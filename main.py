import atexit

from app import create_app
from app.config import Settings
from app.gcp_clients import init_services

settings = Settings.from_env()
clients = init_services(settings)
atexit.register(clients.close)

app = create_app(settings, clients)

if __name__ == "__main__":
    app.run(debug=False, host="0.0.0.0", port=settings.port)
