"""Module for announcing freshly generated URLs through IndexNow.

Adds the following on top of a plain POST:

* Custom "User‑Agent" header that names the tool and includes a contact
  e‑mail address
* Batching, since an IndexNow request accepts at most 10,000 URLs

The key, contact e‑mail and endpoint can be configured through a ``.env``
file placed in the project root:

```env
# .env
EMAIL=webmaster@example.com
INDEXNOW_KEY=0123456789abcdef
INDEXNOW_KEY_LOCATION=https://example.com/0123456789abcdef.txt
REQUEST_TIMEOUT_SECONDS=30
```

The variables are loaded via *python‑dotenv*.
"""

from __future__ import annotations

import os
from typing import Iterable
from urllib.parse import urlsplit

import requests
from dotenv import load_dotenv

# --- Environment configuration ------------------------------------------------

# Load variables from .env if present; silently ignore missing file
load_dotenv()

_DEFAULT_EMAIL = os.getenv("EMAIL", "contact@example.com")
_DEFAULT_USER_AGENT = f"Sitemap Builder (+{_DEFAULT_EMAIL})"
_DEFAULT_ENDPOINT = os.getenv("INDEXNOW_ENDPOINT", "https://api.indexnow.org/indexnow")
_DEFAULT_KEY = os.getenv("INDEXNOW_KEY")
_DEFAULT_KEY_LOCATION = os.getenv("INDEXNOW_KEY_LOCATION")
_DEFAULT_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

MAX_URLS_PER_REQUEST = 10000


class IndexNowSubmitter:
    """Submits URL lists for a single host to an IndexNow endpoint."""

    def __init__(
        self,
        *,
        key: str | None = None,
        key_location: str | None = None,
        endpoint: str | None = None,
        timeout: int | None = None,
        user_agent: str | None = None,
    ):
        """Create a new ``IndexNowSubmitter``.

        Parameters
        ----------
        key
            IndexNow key verifying ownership of the host. Defaults to the
            ``INDEXNOW_KEY`` env var; a key is required.
        key_location
            URL of the key file when it is not served at ``/<key>.txt``.
        endpoint
            IndexNow endpoint receiving the submissions.
        timeout
            Maximum seconds to wait for an HTTP response.
        user_agent
            Custom *User‑Agent* header value.
        """
        self.key = key or _DEFAULT_KEY
        if not self.key:
            raise ValueError("An IndexNow key is required (set INDEXNOW_KEY)")

        self.key_location = key_location or _DEFAULT_KEY_LOCATION
        self.endpoint = endpoint or _DEFAULT_ENDPOINT
        self.timeout = timeout if timeout is not None else _DEFAULT_TIMEOUT
        self.user_agent = user_agent or _DEFAULT_USER_AGENT

        self._headers = {"User-Agent": self.user_agent}

    def _payload(self, host: str, urls: list) -> dict:
        payload = {"host": host, "key": self.key, "urlList": urls}
        if self.key_location:
            payload["keyLocation"] = self.key_location
        return payload

    def submit(self, urls: Iterable[str]) -> int:
        """Submit *urls* in batches and return how many were submitted.

        All URLs must belong to the same host. HTTP failures are printed and
        re-raised.
        """
        urls = list(urls)
        if not urls:
            print("No URLs to submit.")
            return 0

        hosts = {urlsplit(url).netloc for url in urls}
        if len(hosts) != 1:
            raise ValueError(f"IndexNow URLs must share one host, got {sorted(hosts)}")
        host = hosts.pop()

        for start in range(0, len(urls), MAX_URLS_PER_REQUEST):
            batch = urls[start : start + MAX_URLS_PER_REQUEST]
            print(f"Submitting {len(batch)} URLs to {self.endpoint}...")
            try:
                resp = requests.post(
                    self.endpoint,
                    json=self._payload(host, batch),
                    timeout=self.timeout,
                    headers=self._headers,
                )
                resp.raise_for_status()  # 200 and 202 both mean accepted
            except requests.exceptions.RequestException as e:
                print(f"Error submitting URLs to {self.endpoint}: {e}")
                raise
            print(f"  Accepted with status {resp.status_code}.")

        return len(urls)
