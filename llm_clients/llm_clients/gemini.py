from typing import Any

import google.generativeai
import google.generativeai.types

from llm_clients import logger, types

SAFETY_SETTINGS = {
    google.generativeai.types.HarmCategory.HARM_CATEGORY_HATE_SPEECH: google.generativeai.types.HarmBlockThreshold.BLOCK_NONE,
    google.generativeai.types.HarmCategory.HARM_CATEGORY_HARASSMENT: google.generativeai.types.HarmBlockThreshold.BLOCK_NONE,
    google.generativeai.types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: google.generativeai.types.HarmBlockThreshold.BLOCK_NONE,
    google.generativeai.types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: google.generativeai.types.HarmBlockThreshold.BLOCK_NONE,
}


def tuple2message(
    tuple_messages: tuple[types.TupleMessage, ...]
) -> list[google.generativeai.types.ContentDict]:
    messages: list[google.generativeai.types.ContentDict] = []
    for tuple_message in tuple_messages:
        match tuple_message.role:
            case "user" | "system":
                # Gemini には system ロールが無いので user として渡す
                messages.append(
                    google.generativeai.types.ContentDict(
                        role="user", parts=[tuple_message.content]
                    )
                )
            case "assistant":
                messages.append(
                    google.generativeai.types.ContentDict(
                        role="model", parts=[tuple_message.content]
                    )
                )

    return messages


def _generation_config(response_schema: Any | None) -> google.generativeai.GenerationConfig | None:
    """スキーマが指定されていれば JSON 出力を強制する設定を返す

    Parameters
    ----------
    response_schema
        TypedDict などの Gemini が受け付けるスキーマ
    """
    if response_schema is None:
        return None
    return google.generativeai.GenerationConfig(
        response_mime_type="application/json",
        response_schema=response_schema,
    )


class Gemini:
    """Gemini API のクライアント

    Attributes
    ----------
    api_key
    model
    timeout
        1リクエストあたりのタイムアウト秒
    fee
        これまでのリクエストの累計料金(USD)
    """

    def __init__(
        self, api_key: str, model: str = "gemini-2.5-flash", timeout: float = 60.0
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.fee = 0.0

    def _client(self) -> google.generativeai.GenerativeModel:
        google.generativeai.configure(api_key=self.api_key)
        return google.generativeai.GenerativeModel(self.model)

    def fetch(
        self,
        messages: tuple[types.TupleMessage, ...],
        response_schema: Any | None = None,
    ) -> str:
        """リクエストを1回送ってテキストを返す

        Parameters
        ----------
        messages
        response_schema
            指定した場合はスキーマに沿った JSON 文字列が返る
        """
        response = self._client().generate_content(
            contents=tuple2message(messages),
            generation_config=_generation_config(response_schema),
            safety_settings=SAFETY_SETTINGS,
            request_options={"timeout": self.timeout},
        )
        logger.logger.debug(response)
        self.calc_fee(response)
        return response.text

    async def fetch_async(
        self,
        messages: tuple[types.TupleMessage, ...],
        response_schema: Any | None = None,
    ) -> str:
        """fetch の非同期版"""
        response = await self._client().generate_content_async(
            contents=tuple2message(messages),
            generation_config=_generation_config(response_schema),
            safety_settings=SAFETY_SETTINGS,
            request_options={"timeout": self.timeout},
        )
        logger.logger.debug(response)
        self.calc_fee(response)
        return response.text

    def calc_fee(self, response: google.generativeai.types.GenerateContentResponse):
        if self.model.startswith("gemini-2.5-flash"):
            input_token_price = 0.30 / 1_000_000
            output_token_price = 2.50 / 1_000_000
        elif self.model.startswith("gemini-2.5-pro"):
            input_token_price = 1.25 / 1_000_000
            output_token_price = 10.0 / 1_000_000
        elif self.model.startswith("gemini-1.5-flash"):
            input_token_price = 0.00001875 / 1_000
            output_token_price = 0.000075 / 1_000
        else:
            input_token_price = 0
            output_token_price = 0

        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return

        self.fee += (
            usage.prompt_token_count * input_token_price
            + usage.candidates_token_count * output_token_price
        )
