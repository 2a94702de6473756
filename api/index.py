# Serverless entrypoint for the backend API.
# The Python runtime picks up the module-level WSGI `app`. Storage comes from
# site_config.json / STORAGE_BACKEND and defaults to in-memory, since the
# serverless filesystem is not writable.

import logging

from components.backend import create_app

logging.basicConfig(level=logging.INFO)

app = create_app()
