"""
HTTP API of the balance exporter.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from balance_exporter.collector import scrape
from balance_exporter.config import Settings
from balance_exporter.utils.constants import VERSION

logger = logging.getLogger(__name__)

LANDING_PAGE = """<html>
<head><title>MiningPoolHub Exporter</title></head>
<body>
<h1>MiningPoolHub Exporter</h1>
<p>Usage: {metrics_path}?apikey=apikey&amp;fiat={default_fiat}</p>
</body>
</html>"""


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the exporter application.

    Args:
        settings: Exporter settings (defaults if None)

    Returns:
        FastAPI application serving the landing page and the metrics endpoint
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="MiningPoolHub Exporter",
        description="Prometheus exporter for MiningPoolHub balances",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.settings = settings

    @app.get("/", response_class=HTMLResponse)
    def read_root():
        return LANDING_PAGE.format(
            metrics_path=settings.metrics_path,
            default_fiat=settings.default_fiat
        )

    # Sync route, so uvicorn runs concurrent scrapes in its threadpool
    @app.get(settings.metrics_path)
    def metrics(
        apikey: Optional[str] = Query(None),
        fiat: Optional[str] = Query(None),
        conversion: Optional[str] = Query(None)
    ):
        if not apikey:
            logger.warning("Rejected scrape without apikey")
            raise HTTPException(status_code=400, detail="apikey must be provided")

        currency = (fiat or conversion or settings.default_fiat).upper()
        body = scrape(apikey, currency, settings)
        return Response(content=body, media_type=CONTENT_TYPE_LATEST)

    return app
