"""Transcription flow for recorded audio notes (e.g. call or meeting outcomes)."""

from typing import Any, Dict, List

from models.flow_schemas import TranscriptionInput, TranscriptionOutput
from utils.llm import MediaPart

from .base import BaseFlow, FlowName
from .templates import PromptTemplate, PromptVariable


TRANSCRIPTION_TEMPLATE = PromptTemplate(
    name="transcription",
    description="Transcribe an attached audio recording",
    template="""You are a transcription service for a sales team. Transcribe the attached audio recording verbatim.

Expected language: $language_hint

Rules:
- Return only the spoken words in the 'transcript' field.
- Do not summarize, translate or add commentary.
- If a word is unintelligible, write [inaudible].""",
    variables=[
        PromptVariable("language_hint", "Expected spoken language", required=False, default_value="auto-detect"),
    ],
)


class TranscriptionFlow(BaseFlow[TranscriptionInput, TranscriptionOutput]):
    """Transcribes an audio data URI; the audio travels as an inline media part."""

    name = FlowName.TRANSCRIPTION
    input_model = TranscriptionInput
    output_model = TranscriptionOutput
    template = TRANSCRIPTION_TEMPLATE
    description = "Transcribe a recorded audio note into text"

    def template_variables(self, data: TranscriptionInput) -> Dict[str, Any]:
        return {"language_hint": data.language_hint}

    def media_parts(self, data: TranscriptionInput) -> List[MediaPart]:
        return [MediaPart(mime_type=data.mime_type, data=data.audio_bytes())]
