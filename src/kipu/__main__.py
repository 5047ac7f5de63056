"""Run the Kipu gateway: python -m kipu"""

import logging

import uvicorn

from kipu.config import load_config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

config = load_config()
uvicorn.run("kipu.app:create_app", host=config.host, port=config.port, factory=True)
