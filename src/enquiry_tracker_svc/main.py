import logging

import uvicorn
from enquiry_tracker_svc import config
from enquiry_tracker_svc.app import app


# Set up logging for the application
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    # Entry point for the application
    main()
