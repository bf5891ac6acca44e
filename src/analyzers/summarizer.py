"""
Summary Request Module.

Sends the synthesized prompt to an OpenAI-compatible chat completion
endpoint and returns the generated summary. Each call is a single attempt;
transport and response failures are translated into pipeline errors.
"""

from typing import Dict, List, Optional

from openai import APIError, APIStatusError, AsyncOpenAI
from tiktoken import Encoding

from analyzers.prompts import PROMPT_TEMPLATE_VERSION, SYSTEM_PROMPT
from config import logger
from errors import NoCompletionError, UpstreamError

SUMMARY_TEMPERATURE = 0.7


def build_client(endpoint: str, credential: str, timeout: float = 120.0) -> AsyncOpenAI:
    """
    Create a completion client that never retries on its own.

    Args:
        endpoint (str): Base URL of the completion API
        credential (str): Bearer credential
        timeout (float): Transport timeout in seconds

    Returns:
        AsyncOpenAI: Configured client
    """
    return AsyncOpenAI(
        api_key=credential, base_url=endpoint, timeout=timeout, max_retries=0
    )


class SummaryRequester:
    """
    Requests the performance summary from the completion endpoint.

    Attributes:
        client (AsyncOpenAI): OpenAI API client
        model (str): Model identifier
        encoding (Optional[Encoding]): Tokenizer used to log prompt size
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        encoding: Optional[Encoding] = None,
    ):
        self.client = client
        self.model = model
        self.encoding = encoding

    def _count_tokens(self, text: str) -> int:
        """
        Count tokens in text using the model's tokenizer.

        Args:
            text (str): Text to count tokens for

        Returns:
            int: Number of tokens in text
        """
        return len(self.encoding.encode(text))

    @staticmethod
    def build_messages(prompt: str) -> List[Dict[str, str]]:
        """System instruction followed by the synthesized prompt."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    async def request_summary(self, prompt: str) -> str:
        """
        Request a summary for the given prompt.

        Args:
            prompt (str): Synthesized user prompt

        Returns:
            str: Content of the first completion choice

        Raises:
            UpstreamError: If the endpoint fails or answers with a non-success status
            NoCompletionError: If the response carries no completion text
        """
        logger.info(
            {
                "message": "Requesting summary",
                "model": self.model,
                "template_version": PROMPT_TEMPLATE_VERSION,
                "prompt_tokens": (
                    self._count_tokens(prompt) if self.encoding is not None else None
                ),
            }
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt),
                temperature=SUMMARY_TEMPERATURE,
            )
        except APIStatusError as e:
            logger.error(
                {
                    "message": "Completion endpoint returned an error",
                    "status_code": e.status_code,
                    "body": e.response.text,
                }
            )
            raise UpstreamError(
                f"Completion endpoint returned HTTP {e.status_code}",
                body=e.response.text,
                status_code=e.status_code,
            ) from e
        except APIError as e:
            logger.error({"message": "Completion request failed", "error": str(e)})
            raise UpstreamError(
                f"Completion request failed: {e.message}",
                body=str(e.body) if e.body is not None else "",
            ) from e

        if not response.choices:
            raise NoCompletionError("Completion endpoint returned no choices")

        content = response.choices[0].message.content
        if content is None:
            raise NoCompletionError("First completion choice has no text content")
        return content
