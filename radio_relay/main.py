from fastapi import FastAPI

from radio_relay import __version__
from radio_relay.routes.relay import relay_endpoint
from radio_relay.routes.service import router as service_router

# no /docs, /redoc or /openapi.json: those paths belong to the relay
app = FastAPI(title="Radio Relay", version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
# service routes first, the relay catches every other path and method
app.include_router(service_router)
app.add_route("/{path:path}", relay_endpoint, methods=None, include_in_schema=False)
