from dataclasses import dataclass
import requests

DEFAULT_TIMEOUT = 2.0

# hop-by-hop headers, never copied between client and backend
RESTRICTED_HEADERS = {"host", "content-length", "transfer-encoding", "connection"}


@dataclass(frozen=True)
class Backend:
    host: str
    port: int

    @property
    def url(self):
        return f"http://{self.host}:{self.port}"

    @staticmethod
    def is_invalid(backend):
        return backend is None or not backend.host or backend.port <= 0

    def is_valid(self):
        return not Backend.is_invalid(self)

    def is_healthy(self, timeout=DEFAULT_TIMEOUT):
        if Backend.is_invalid(self):
            return False
        try:
            resp = requests.get(f"{self.url}/health", timeout=timeout)
        except requests.RequestException:
            return False
        return resp.status_code == 200

    def forward(self, method, path, headers=None, body=None, timeout=DEFAULT_TIMEOUT):
        """Replay a request against this backend.

        Returns ``(status, headers, body)``. Transport errors are raised as
        ``requests.RequestException``.
        """
        if Backend.is_invalid(self):
            raise ValueError(f"Invalid backend: {self}")

        outgoing = {k: v for k, v in (headers or {}).items() if k.lower() not in RESTRICTED_HEADERS}
        # stream so the body is relayed as sent, still content-encoded
        with requests.request(
            method,
            f"{self.url}{path}",
            headers=outgoing,
            data=body,
            timeout=timeout,
            allow_redirects=False,
            stream=True,
        ) as resp:
            content = resp.raw.read(decode_content=False)
            # raw urllib3 headers keep repeated fields such as Set-Cookie apart
            kept = [
                (k, v) for k, v in resp.raw.headers.items()
                if k.lower() not in RESTRICTED_HEADERS
            ]
        return resp.status_code, kept, content

    def __str__(self):
        return f"{self.host}:{self.port}"
