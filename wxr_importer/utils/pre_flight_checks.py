import os

import requests


class PreFlightCheckError(Exception):
    """Custom exception for pre-flight check failures."""
    pass


def run_source_pre_flight_checks(source: str, timeout: int = 30) -> None:
    """
    Verifies that an export source can be read before it is parsed.

    Local paths must be existing, readable files.  For ``http(s)://`` URLs a
    ``HEAD`` request must succeed.

    Args:
        source: Path or URL of the WXR export.
        timeout: Seconds to wait for the remote check.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    if source.startswith(("http://", "https://")):
        try:
            response = requests.head(source, timeout=timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise PreFlightCheckError(f"Export not found at {source}")
            raise PreFlightCheckError(f"Unexpected HTTP error checking {source}: {e}")
        except requests.RequestException as e:
            raise PreFlightCheckError(f"Network error connecting to {source}: {e}")
        return

    if not os.path.exists(source):
        raise PreFlightCheckError(f"Export file not found: {source}")
    if not os.path.isfile(source):
        raise PreFlightCheckError(f"Export path is not a file: {source}")
    if not os.access(source, os.R_OK):
        raise PreFlightCheckError(f"Export file is not readable: {source}")
