"""WordPress publishing collaborator using the REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from litconvert.application.results import PublishResult
from litconvert.config import WordPressSettings
from litconvert.errors import PublishError, PublishPreconditionError

logger = logging.getLogger(__name__)


class WordPressPublisher:
    """Create and update posts/pages through ``/wp-json/wp/v2``.

    Authentication uses a WordPress application password.
    """

    def __init__(
        self,
        url: str,
        user: str | None = None,
        password: str | None = None,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url:
            raise PublishPreconditionError("WordPress site URL is not configured.")
        self.base_url = f"{url.rstrip('/')}/wp-json/wp/v2"
        self.timeout = timeout
        self.session = session or requests.Session()
        if user and password:
            self.session.auth = (user, password)

    @classmethod
    def from_settings(cls, settings: WordPressSettings) -> WordPressPublisher:
        """Build a publisher from ``LITCONVERT_WP_*`` settings."""
        return cls(
            settings.url or "",
            settings.user,
            settings.password,
            timeout=settings.timeout_seconds,
        )

    def newPost(  # noqa: N802
        self, content: Mapping[str, object], publish: bool = True
    ) -> PublishResult:
        return self._send("newPost", "posts", content, publish)

    def editPost(  # noqa: N802
        self,
        post_id: int | str,
        content: Mapping[str, object],
        publish: bool = True,
    ) -> PublishResult:
        return self._send("editPost", f"posts/{post_id}", content, publish)

    def newPage(  # noqa: N802
        self, content: Mapping[str, object], publish: bool = True
    ) -> PublishResult:
        return self._send("newPage", "pages", content, publish)

    def _send(
        self,
        action: str,
        endpoint: str,
        content: Mapping[str, object],
        publish: bool,
    ) -> PublishResult:
        payload = _build_payload(content, publish)
        url = f"{self.base_url}/{endpoint}"
        logger.debug("POST %s", url)
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as exc:
            raise PublishError(
                f"WordPress rejected {action}: {exc.response.status_code} {exc.response.text}"
            ) from exc
        except requests.RequestException as exc:
            raise PublishError(f"WordPress request for {action} failed: {exc}") from exc

        logger.info("%s succeeded: id=%s", action, data.get("id"))
        return PublishResult(action=action, post_id=data.get("id"), link=data.get("link"))


def _build_payload(content: Mapping[str, object], publish: bool) -> dict[str, object]:
    """Map the generic content mapping onto REST API fields."""
    payload: dict[str, object] = {
        key: value for key, value in content.items() if key not in {"description", "title"}
    }
    payload["title"] = content.get("title", "")
    payload["content"] = content.get("description", "")
    payload["status"] = "publish" if publish else "draft"
    return payload
