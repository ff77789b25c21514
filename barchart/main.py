"""FastAPI application entry point."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from barchart.config import Settings, get_settings
from barchart.core.encoder import ChartEncoder
from barchart.models import ChartError, ChartGeometry, RenderedChart
from barchart.render.visualizer import Visualizer
from barchart.utils.logger import configure_logger, log_extra

logger = configure_logger(__name__)

app = FastAPI(title="Team Scores Bar Chart")


@app.on_event("startup")
async def startup_event() -> None:  # pragma: no cover - startup side effects
    """Build the encoder and renderer once the application boots."""
    app.state.encoder = ChartEncoder(get_settings())
    app.state.visualizer = Visualizer()


@app.exception_handler(ChartError)
async def chart_error_handler(request: Request, exc: ChartError) -> JSONResponse:
    logger.warning(
        "Chart encoding failed",
        extra=log_extra(path=request.url.path, error=str(exc), value=exc.value),
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


def get_encoder(request: Request) -> ChartEncoder:
    encoder: Optional[ChartEncoder] = getattr(request.app.state, "encoder", None)
    if encoder is None:
        raise RuntimeError("Chart encoder is not initialised")
    return encoder


def get_visualizer(request: Request) -> Visualizer:
    visualizer: Optional[Visualizer] = getattr(request.app.state, "visualizer", None)
    if visualizer is None:
        raise RuntimeError("Visualizer is not initialised")
    return visualizer


def get_config() -> Settings:
    return get_settings()


@app.get("/", response_class=HTMLResponse)
async def chart_page(
    encoder: ChartEncoder = Depends(get_encoder),
    visualizer: Visualizer = Depends(get_visualizer),
    settings: Settings = Depends(get_config),
) -> HTMLResponse:
    return HTMLResponse(visualizer.html(encoder.encode(), title=settings.app_name))


@app.get("/chart", response_model=ChartGeometry)
async def chart_geometry(encoder: ChartEncoder = Depends(get_encoder)) -> ChartGeometry:
    return encoder.encode()


@app.get("/chart.svg")
async def chart_svg(
    encoder: ChartEncoder = Depends(get_encoder),
    visualizer: Visualizer = Depends(get_visualizer),
) -> Response:
    return Response(content=visualizer.svg(encoder.encode()), media_type="image/svg+xml")


@app.get("/chart.png", response_model=RenderedChart)
async def chart_png(
    encoder: ChartEncoder = Depends(get_encoder),
    visualizer: Visualizer = Depends(get_visualizer),
    settings: Settings = Depends(get_config),
) -> RenderedChart:
    return await visualizer.png(encoder.encode(), title=settings.app_name)


@app.get("/healthz")
async def healthcheck() -> dict:
    return {"status": "ok"}
