"""AWS Lambda entry point.

Mangum translates API Gateway proxy events into ASGI requests for the
FastAPI app. Lifespan events are not delivered on Lambda, so logging is set up
at import time and the browser is left to die with the execution environment.
"""

from mangum import Mangum

from print2pdf.api.config import settings
from print2pdf.main import app
from print2pdf.utils.metrics import configure_logging

configure_logging(log_level=settings.log_level, log_format=settings.log_format)

handler = Mangum(app, lifespan="off")
