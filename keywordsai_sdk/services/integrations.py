from typing import List

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import (
    EmbeddingRequest,
    EmbeddingResponse,
    STTRequest,
    STTResponse,
    TTSRequest,
)
from keywordsai_sdk.http.utils.multipart import MultipartField

SPEECH_PATH = "/api/audio/speech"
TRANSCRIPTIONS_PATH = "/api/audio/transcriptions"
EMBEDDINGS_PATH = "/api/embeddings"
DEFAULT_AUDIO_FILE_NAME = "audio.wav"


class IntegrationsService:
    """Audio and embedding integrations."""

    def __init__(self, client: KeywordsAIHTTPClient):
        self.__client = client

    def text_to_speech(self, request: TTSRequest) -> bytes:
        """Synthesise speech and return the raw audio content."""
        return self.__client.post(SPEECH_PATH, payload=request, result_type=bytes)

    async def text_to_speech_async(self, request: TTSRequest) -> bytes:
        return await self.__client.post_async(
            SPEECH_PATH, payload=request, result_type=bytes
        )

    def speech_to_text(
        self,
        audio_data: bytes,
        request: STTRequest,
        file_name: str = DEFAULT_AUDIO_FILE_NAME,
    ) -> STTResponse:
        """Transcribe audio uploaded as multipart form.

        Args:
            audio_data: Raw audio content.
            request: Transcription parameters.
            file_name: File name announced for the audio part.

        Returns:
            STTResponse: The transcription.
        """
        return self.__client.post_multipart(
            TRANSCRIPTIONS_PATH,
            fields=build_transcription_fields(
                audio_data=audio_data, request=request, file_name=file_name
            ),
            result_type=STTResponse,
        )

    async def speech_to_text_async(
        self,
        audio_data: bytes,
        request: STTRequest,
        file_name: str = DEFAULT_AUDIO_FILE_NAME,
    ) -> STTResponse:
        return await self.__client.post_multipart_async(
            TRANSCRIPTIONS_PATH,
            fields=build_transcription_fields(
                audio_data=audio_data, request=request, file_name=file_name
            ),
            result_type=STTResponse,
        )

    def create_embeddings(self, request: EmbeddingRequest) -> EmbeddingResponse:
        return self.__client.post(
            EMBEDDINGS_PATH, payload=request, result_type=EmbeddingResponse
        )

    async def create_embeddings_async(
        self, request: EmbeddingRequest
    ) -> EmbeddingResponse:
        return await self.__client.post_async(
            EMBEDDINGS_PATH, payload=request, result_type=EmbeddingResponse
        )


def build_transcription_fields(
    audio_data: bytes, request: STTRequest, file_name: str
) -> List[MultipartField]:
    fields = [
        MultipartField.text(name="model", value=request.model),
        MultipartField.file(name="file", file_name=file_name, data=audio_data),
    ]
    if request.response_format is not None:
        fields.append(
            MultipartField.text(name="response_format", value=request.response_format)
        )
    if request.language is not None:
        fields.append(MultipartField.text(name="language", value=request.language))
    if request.temperature is not None:
        fields.append(
            MultipartField.text(name="temperature", value=f"{request.temperature:f}")
        )
    if request.prompt is not None:
        fields.append(MultipartField.text(name="prompt", value=request.prompt))
    return fields
