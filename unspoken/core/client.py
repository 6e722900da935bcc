"""Chat session bound to an OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import httpx
import openai
from openai import OpenAI  # type: ignore

from ..errors import ChatError
from .history import History, Message

if TYPE_CHECKING:  # pragma: no cover
    from ..config import Settings

logger = logging.getLogger(__name__)


class ChatSession:
    """Conversation history plus the client used to continue it.

    Every call to :meth:`ask` sends the whole history and waits for the full
    reply. There is no streaming and no retry.
    """

    def __init__(
        self,
        client: OpenAI,
        model: str,
        system_message: Optional[str] = None,
    ) -> None:
        self.client = client
        self.model = model
        self._history = History(system_message)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        http_client: Optional[httpx.Client] = None,
    ) -> "ChatSession":
        client_kwargs: dict[str, Any] = {
            "api_key": settings.api_key,
            "base_url": settings.api_url,
            "max_retries": 0,
        }
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        client = OpenAI(**client_kwargs)  # type: ignore[arg-type]
        return cls(client, settings.model, settings.system_message)

    @property
    def history(self) -> Tuple[Message, ...]:
        return self._history.snapshot()

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_reply(completion: Any) -> str:
        """Return the first choice's message content or raise :class:`ChatError`."""
        # The SDK builds response objects without validation, so any field
        # may hold an unexpected type.
        choices = getattr(completion, "choices", None)
        if not isinstance(choices, list) or not choices:
            raise ChatError("Malformed response: no choices returned")
        message = getattr(choices[0], "message", None)
        if message is None:
            raise ChatError("Malformed response: first choice has no message")
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise ChatError("Malformed response: message has no text content")
        return content

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ask(self, user_text: str) -> str:
        """Send *user_text* with the conversation so far and return the reply.

        The user turn is kept in the history even when the request fails, so
        it is part of the context of the next request.
        """
        self._history.add_user_message(user_text)
        messages = list(self._history.messages)
        logger.debug(
            "Sending %d messages to %s (model=%s)",
            len(messages),
            self.client.base_url,
            self.model,
        )

        try:
            completion = self.client.chat.completions.create(  # type: ignore[call-overload]
                model=self.model,
                messages=messages,
            )
        except openai.APIConnectionError as exc:
            raise ChatError(f"Failed to reach {self.client.base_url}") from exc
        except openai.APIStatusError as exc:
            raise ChatError(f"Request failed with status {exc.status_code}") from exc
        except openai.OpenAIError as exc:
            raise ChatError("Request failed") from exc
        except ValueError as exc:
            # body declared as JSON but not decodable
            raise ChatError("Malformed response: body is not valid JSON") from exc

        reply = self._extract_reply(completion)
        self._history.add_assistant_message(reply)
        logger.debug("Received reply (%d characters)", len(reply))
        return reply
