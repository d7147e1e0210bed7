from core.domain.service_assertions import ServiceAssertions


def test_status_assertion_reports_expected_and_actual_codes() -> None:
    assertions = ServiceAssertions(status=(200, 201))

    assert assertions.check_status_code(201) is None
    assert assertions.check_status_code(500) == "Expected status 200, 201, got 500"


def test_body_assertion_names_missing_text() -> None:
    assertions = ServiceAssertions(contains_text="healthy")

    assert assertions.check_body("service is healthy") is None
    assert assertions.check_body("error") == "Response does not contain expected text: healthy"


def test_empty_assertions_accept_anything() -> None:
    assertions = ServiceAssertions()

    assert assertions.check_status_code(503) is None
    assert assertions.check_body("") is None


def test_empty_status_set_accepts_no_code() -> None:
    assertions = ServiceAssertions(status=())

    assert assertions.check_status_code(200) == "Expected status , got 200"
