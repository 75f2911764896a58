"""WSGI entry point for the application."""
import logging

from omdb_proxy import create_app

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

application = create_app()

if __name__ == "__main__":
    application.run(host="0.0.0.0", port=5000)
