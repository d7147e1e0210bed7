from core.domain.check_result import CheckResult
from core.domain.check_status import CheckStatus


def test_to_dict_keeps_field_order_and_omits_missing_values() -> None:
    result = CheckResult(id="web", timestamp=1_000, status=CheckStatus.DOWN, message="timed out")

    payload = result.to_dict()

    assert list(payload) == ["id", "timestamp", "status", "message"]
    assert payload["status"] == "down"


def test_to_dict_includes_status_code_and_response_time() -> None:
    result = CheckResult(
        id="api",
        timestamp=1_000,
        status=CheckStatus.UP,
        status_code=200,
        response_time=87,
        message="OK",
    )

    assert result.to_dict() == {
        "id": "api",
        "timestamp": 1_000,
        "status": "up",
        "statusCode": 200,
        "responseTime": 87,
        "message": "OK",
    }


def test_is_up_follows_status() -> None:
    assert CheckResult(id="a", timestamp=0, status=CheckStatus.UP).is_up is True
    assert CheckResult(id="a", timestamp=0, status=CheckStatus.DOWN).is_up is False
