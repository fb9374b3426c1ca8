from typing import Optional

import httpx
import openai


class LLMClient:
    """
    Chat completion client for the Groq inference API, which is reached through
    its OpenAI compatible endpoint with the ``openai`` SDK.
    """

    def __init__(self, api_key: str, base_url: str, model: str, timeout: float = 60.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.model = model
        # every call is made once, failures are handled by the caller
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(
        self,
        system_message: str,
        user_message: str,
        temperature: float,
        json_response: bool = False,
    ) -> Optional[str]:
        """
        Sends one system instruction and one user message and returns the text
        content of the first choice.

        :param system_message: Instruction for the model.
        :param user_message: The message to analyze.
        :param temperature: Sampling temperature.
        :param json_response: Request a JSON object response format.
        :return: The reply content, or None when the model returned no content.
        :raises openai.APIError: on any API or transport failure.
        """
        params = {}
        if json_response:
            params["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_message},
                {"role": "user", "content": user_message},
            ],
            temperature=temperature,
            **params,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def aclose(self) -> None:
        await self._client.close()
