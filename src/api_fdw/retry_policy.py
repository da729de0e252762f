from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from api_fdw.errors import TransportError


def with_retry(max_attempts: int = 1):
    return retry(
        reraise=True,
        retry=retry_if_exception_type(TransportError),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(multiplier=0.2, max=5),
    )
