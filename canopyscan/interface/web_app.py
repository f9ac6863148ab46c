"""Mini README: FastAPI service exposing estates and survey flight plans.

Structure:
    * EstateRequest / TreeRequest - JSON bodies for the registration routes.
    * create_application - application factory wiring routes to a store.

Routes:
    * POST /estate - register an estate of ``width`` rows by ``length`` columns.
    * POST /estate/{estate_id}/tree - plant a tree at ``(x, y)``.
    * GET /estate/{estate_id}/stats - canopy height statistics.
    * GET /estate/{estate_id}/drone-plan - survey flight distance, optionally
      capped with ``?max-distance=N``.

The store is injected into the factory and reached by handlers through a
FastAPI dependency. Validation errors, malformed JSON bodies included, become
400 responses and unknown estates 404, mirroring how the planner raises
``ValueError`` and the store raises ``KeyError``.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..configuration import get_settings
from ..estates import EstateStore, InMemoryEstateStore, PlotNotFoundError
from ..logging_utils import get_logger
from ..survey_planning import plan_survey

LOGGER = get_logger(__name__)


class EstateRequest(BaseModel):
    """Body accepted when registering an estate."""

    width: int
    length: int
    name: str = ""


class TreeRequest(BaseModel):
    """Body accepted when planting a tree."""

    x: int
    y: int
    height: int


def _estate_store(request: Request) -> EstateStore:
    return request.app.state.estate_store


def create_application(store: Optional[EstateStore] = None) -> FastAPI:
    """Create the FastAPI application bound to ``store``."""

    settings = get_settings()
    app = FastAPI(title="Canopyscan Survey Planner", version="0.1.0")
    if store is None:
        store = InMemoryEstateStore(
            max_dimension=settings.max_plot_dimension,
            max_height=settings.max_tree_height,
        )
    app.state.estate_store = store

    @app.exception_handler(RequestValidationError)
    async def invalid_input(request: Request, error: RequestValidationError) -> JSONResponse:
        """Report malformed bodies as 400 like the planner's own validation errors."""

        LOGGER.debug("Rejected malformed request to %s: %s", request.url.path, error.errors())
        return JSONResponse({"detail": "invalid input"}, status_code=400)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/estate")
    async def create_estate(
        payload: EstateRequest, estates: EstateStore = Depends(_estate_store)
    ) -> JSONResponse:
        """Register an estate and return its identifier."""

        try:
            estate = estates.create_estate(payload.width, payload.length, name=payload.name)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"id": estate.estate_id})

    @app.post("/estate/{estate_id}/tree")
    async def add_tree(
        estate_id: str,
        payload: TreeRequest,
        estates: EstateStore = Depends(_estate_store),
    ) -> JSONResponse:
        """Plant a tree inside an existing estate."""

        try:
            record = estates.add_tree(estate_id, payload.x, payload.y, payload.height)
        except PlotNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"id": record.tree_id})

    @app.get("/estate/{estate_id}/stats")
    async def estate_stats(
        estate_id: str, estates: EstateStore = Depends(_estate_store)
    ) -> JSONResponse:
        """Return tree count and canopy height statistics."""

        try:
            stats = estates.summarise_heights(estate_id)
        except PlotNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        LOGGER.debug("Stats for estate %s -> %s", estate_id, stats)
        return JSONResponse(stats)

    # Plain ``def`` so the CPU-bound sweep runs in the threadpool.
    @app.get("/estate/{estate_id}/drone-plan")
    def drone_plan(
        estate_id: str,
        max_distance: Optional[str] = Query(None, alias="max-distance"),
        estates: EstateStore = Depends(_estate_store),
    ) -> JSONResponse:
        """Compute the survey flight distance for an estate."""

        try:
            snapshot = estates.snapshot(estate_id)
            result = plan_survey(
                snapshot.plot.width,
                snapshot.plot.length,
                snapshot.trees,
                max_distance,
                max_dimension=settings.max_plot_dimension,
                max_height=settings.max_tree_height,
            )
        except PlotNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        LOGGER.info("Drone plan for estate %s -> %s", estate_id, result)
        return JSONResponse(result.as_dict())

    return app
