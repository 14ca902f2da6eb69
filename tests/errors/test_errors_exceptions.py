import errno
import unittest

from drivesh.errors.exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    DriveShError,
    HttpErrorInfo,
    NotFoundError,
    NoValidDriveError,
    ProviderError,
    RateLimitError,
    TransportError,
    is_retryable,
    map_http_error,
    map_os_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DriveShError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_details_default_to_empty_dict(self) -> None:
        self.assertEqual(NoValidDriveError("none").details, {})

    def test_map_http_error_basic(self) -> None:
        cases = {
            401: AuthError,
            403: AccessDeniedError,
            404: NotFoundError,
            409: ConflictError,
            412: ConflictError,
            429: RateLimitError,
            503: TransportError,
            418: ApiError,
        }
        for status, expected in cases.items():
            err = map_http_error(HttpErrorInfo(status_code=status, message="m"))
            self.assertIsInstance(err, expected, status)
            self.assertIsInstance(err, ProviderError)
            self.assertEqual(err.details["status_code"], status)

    def test_map_http_error_default_message_and_extra_details(self) -> None:
        cause = ValueError("x")
        err = map_http_error(
            HttpErrorInfo(status_code=500, details={"url": "http://s/x"}),
            cause=cause,
        )
        self.assertEqual(str(err), "HTTP error 500")
        self.assertEqual(err.details["url"], "http://s/x")
        self.assertIs(err.cause, cause)

    def test_is_retryable(self) -> None:
        self.assertTrue(is_retryable(TransportError("net")))
        self.assertTrue(is_retryable(RateLimitError("slow down")))
        self.assertFalse(is_retryable(NotFoundError("gone")))
        self.assertFalse(is_retryable(ValueError("x")))

    def test_map_os_error(self) -> None:
        missing = map_os_error(FileNotFoundError(errno.ENOENT, "gone"), "/a")
        self.assertIsInstance(missing, NotFoundError)
        self.assertEqual(missing.details, {"path": "/a"})

        self.assertIsInstance(map_os_error(PermissionError(errno.EACCES, "no"), "/a"), AccessDeniedError)

        full = map_os_error(OSError(errno.ENOSPC, "No space left on device"), "/a")
        self.assertIsInstance(full, TransportError)
        self.assertIsInstance(full.cause, OSError)


if __name__ == "__main__":
    unittest.main()
