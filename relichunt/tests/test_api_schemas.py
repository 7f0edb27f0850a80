"""
Tests for API schemas.

Tests:
- Pydantic schema validation
- Error code coverage
- OpenAPI schema generation
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema definitions."""

    def test_move_request_validation(self):
        """MoveRequest only accepts the four directions."""
        from relichunt.api.schemas import MoveRequest, DirectionValue

        assert MoveRequest(direction="left").direction == DirectionValue.LEFT

        with pytest.raises(ValidationError):
            MoveRequest(direction="north")
        with pytest.raises(ValidationError):
            MoveRequest()

    def test_answer_request_defaults_to_draft(self):
        from relichunt.api.schemas import AnswerRequest

        assert AnswerRequest().answer is None
        assert AnswerRequest(answer="echo").answer == "echo"

    def test_select_option_rejects_negative(self):
        from relichunt.api.schemas import SelectOptionRequest

        assert SelectOptionRequest(index=0).index == 0
        with pytest.raises(ValidationError):
            SelectOptionRequest(index=-1)

    def test_error_response_schema(self):
        """ErrorResponse has structured error codes."""
        from relichunt.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": "bad-id"},
        )

        data = error.model_dump()
        assert data["error"] == "Session not found"
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"]["session_id"] == "bad-id"
        assert data["api_version"] == "v1"

    def test_game_response_schema(self):
        """GameResponse carries the grid and the player."""
        from relichunt.api.schemas import (
            GameResponse,
            GameModeValue,
            GridInfo,
            PlayerInfo,
            PuzzleInfo,
            RoomInfo,
            SessionStatus,
        )

        response = GameResponse(
            session_id="session-123",
            game_id="hunt_abc",
            status=SessionStatus.ACTIVE,
            grid=GridInfo(
                size=1,
                rooms=[[RoomInfo(x=0, y=0, discovered=True, kind="relic", relic_id=1)]],
                discovered_count=1,
            ),
            player=PlayerInfo(
                x=0,
                y=0,
                health=90,
                max_health=100,
                relics_collected=0,
                relics_required=3,
                title="Novice Explorer",
                story="A puzzle blocks your way.",
                mode=GameModeValue.PUZZLE_ACTIVE,
                puzzle=PuzzleInfo(
                    kind="catalog",
                    puzzle_type="riddle",
                    question="What am I?",
                    relic_id=1,
                ),
            ),
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "active"
        assert data["player"]["mode"] == "puzzle_active"
        assert data["player"]["puzzle"]["options"] == []
        assert data["grid"]["rooms"][0][0]["kind"] == "relic"
        assert data["applied"] is True
        assert data["api_version"] == "v1"


    def test_session_status_values(self):
        """Only states a live session can report are exposed."""
        from relichunt.api.schemas import SessionStatus

        assert {status.value for status in SessionStatus} == {"active", "game_over"}


class TestErrorCodes:
    """Tests for error code coverage."""

    def test_all_error_codes_defined(self):
        from relichunt.api.schemas import ErrorCode

        for code in ["SESSION_NOT_FOUND", "VALIDATION_ERROR"]:
            assert hasattr(ErrorCode, code), f"Missing error code: {code}"
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from relichunt.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def schema(self):
        from relichunt.api.app import create_app
        from fastapi.openapi.utils import get_openapi

        app = create_app()
        return get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

    def test_openapi_schema_generates(self, schema):
        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, schema):
        schemas = schema["components"]["schemas"]

        for name in ["GameResponse", "PlayerInfo", "GridInfo", "PuzzleInfo", "ErrorResponse"]:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_have_response_models(self, schema):
        paths = schema["paths"]

        assert "200" in paths["/api/v1/games"]["post"]["responses"]
        assert "200" in paths["/api/v1/games/{session_id}"]["get"]["responses"]
        for action in ["move", "answer", "option", "puzzle/dismiss", "rewards/dismiss", "reset"]:
            path = f"/api/v1/games/{{session_id}}/{action}"
            assert path in paths, f"Missing endpoint: {path}"
            assert "200" in paths[path]["post"]["responses"]
