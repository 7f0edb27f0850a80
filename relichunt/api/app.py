"""
FastAPI Application - REST API for game front ends.

Endpoints:
    POST   /api/v1/games                          Start a game session
    GET    /api/v1/games                          List active sessions
    GET    /api/v1/games/{id}                     Get game snapshot
    DELETE /api/v1/games/{id}                     End session
    POST   /api/v1/games/{id}/move                Move one room
    POST   /api/v1/games/{id}/answer              Answer the open puzzle
    POST   /api/v1/games/{id}/option              Pick a quiz option
    POST   /api/v1/games/{id}/puzzle/dismiss      Close the open puzzle
    POST   /api/v1/games/{id}/rewards/dismiss     Close the rewards summary
    POST   /api/v1/games/{id}/reset               Start over with a new grid

Every game endpoint returns the full snapshot. Actions the game does not
allow right now (moving during a puzzle, answering with no puzzle open,
anything after the game ended) are not HTTP errors: the response has
applied=false and the reason.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

# Environment configuration
RELICHUNT_ENV = os.getenv("RELICHUNT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
RELICHUNT_SESSION_TTL = float(os.getenv("RELICHUNT_SESSION_TTL", "3600"))

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
        from fastapi.encoders import jsonable_encoder
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import APIService
    from .schemas import (
        # Request models
        CreateGameRequest,
        MoveRequest,
        AnswerRequest,
        SelectOptionRequest,
        ResetRequest,
        # Response models
        GameResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Relic Hunt API",
        description="""
Single-player grid exploration game.

## Game Flow

1. `POST /games` starts a session with a freshly generated 5x5 grid
2. `POST /games/{id}/move` explores; entering a room resolves it
3. Relic rooms open a puzzle: answer with `POST /games/{id}/answer`
4. With all three relics the final room opens the final and bonus puzzles
5. `POST /games/{id}/reset` starts over at any time

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Request body is invalid |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()
    app.state.api_service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def to_http(response) -> Union[GameResponse, JSONResponse]:
        """Turn a service result into a response, mapping errors to 404."""
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code,
                response.error,
                status_code=404,
            )
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report invalid request bodies in the ErrorResponse format."""
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    def cleanup():
        removed = api_service.session_manager.cleanup_stale_sessions(RELICHUNT_SESSION_TTL)
        if removed:
            logger.info("Removed %d stale sessions", removed)

    not_found = {404: {"model": ErrorResponse, "description": "Session not found"}}

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        tags=["Sessions"],
        summary="Start a new game session",
    )
    async def create_game(body: Optional[CreateGameRequest] = None) -> GameResponse:
        """Start a new game. Pass `random_seed` for a reproducible grid."""
        cleanup()
        return api_service.create_game(body or CreateGameRequest())

    @app.get(
        "/api/v1/games",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_games() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/games/{session_id}",
        response_model=GameResponse,
        responses=not_found,
        tags=["Sessions"],
        summary="Get game snapshot",
    )
    async def get_game(session_id: str) -> Union[GameResponse, JSONResponse]:
        return to_http(api_service.get_game(session_id))

    @app.delete(
        "/api/v1/games/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_game(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Gameplay Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/move",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Move one room",
    )
    async def move(session_id: str, body: MoveRequest) -> Union[GameResponse, JSONResponse]:
        """Move up, down, left or right. Walls and open puzzles make this a no-op."""
        return to_http(api_service.move(session_id, body))

    @app.post(
        "/api/v1/games/{session_id}/answer",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Answer the open puzzle",
    )
    async def answer(session_id: str, body: AnswerRequest) -> Union[GameResponse, JSONResponse]:
        """
        Submit an answer. Matching ignores case and surrounding whitespace.

        A wrong answer costs 10 health; dropping to 10 or below ends the game.
        """
        return to_http(api_service.submit_answer(session_id, body))

    @app.post(
        "/api/v1/games/{session_id}/option",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Pick a quiz option",
    )
    async def select_option(
        session_id: str,
        body: SelectOptionRequest,
    ) -> Union[GameResponse, JSONResponse]:
        return to_http(api_service.select_option(session_id, body))

    @app.post(
        "/api/v1/games/{session_id}/puzzle/dismiss",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Close the open puzzle without answering",
    )
    async def dismiss_puzzle(session_id: str) -> Union[GameResponse, JSONResponse]:
        return to_http(api_service.dismiss_puzzle(session_id))

    @app.post(
        "/api/v1/games/{session_id}/rewards/dismiss",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Close the rewards summary",
    )
    async def dismiss_rewards(session_id: str) -> Union[GameResponse, JSONResponse]:
        return to_http(api_service.dismiss_rewards(session_id))

    @app.post(
        "/api/v1/games/{session_id}/reset",
        response_model=GameResponse,
        responses=not_found,
        tags=["Gameplay"],
        summary="Start over with a new grid",
    )
    async def reset(
        session_id: str,
        body: Optional[ResetRequest] = None,
    ) -> Union[GameResponse, JSONResponse]:
        return to_http(api_service.reset(session_id, body or ResetRequest()))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="relichunt",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Relic Hunt API",
            "version": __version__,
            "environment": RELICHUNT_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
