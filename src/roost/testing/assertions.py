"""Assertion helpers for routing outcomes."""

from roost.http.response import Response


def assert_status(response: Response, status: int) -> None:
    """Assert the response has the expected status code."""
    assert response.status == status, (
        f"Expected status {status}, got {response.status}.\n"
        f"Response body: {response.text[:500]}"
    )


def assert_redirect(response: Response, location: str, *, status: int = 301) -> None:
    """Assert the response redirects to *location*."""
    assert_status(response, status)
    actual = response.header("Location")
    assert actual == location, f"Expected Location {location!r}, got {actual!r}"


def assert_allow(response: Response, *methods: str) -> None:
    """Assert a 405 response advertising exactly *methods*."""
    assert_status(response, 405)
    actual = response.header("Allow") or ""
    expected = ", ".join(sorted(methods))
    assert actual == expected, f"Expected Allow {expected!r}, got {actual!r}"
