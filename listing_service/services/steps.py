from __future__ import annotations

from typing import Optional

from ..contracts_models import ProcessingStep
from .errors import ListingServiceError

# Staged video pipeline, shown to users as progress. None of it runs here.
VIDEO_PIPELINE_STEPS: tuple[tuple[str, str, str], ...] = (
    ("upload", "Video Upload", "Video successfully uploaded and validated"),
    ("audio", "Audio Extraction", "Extracting and processing audio track using ffmpeg"),
    ("transcription", "AI Transcription", "Converting speech to text using OpenAI Whisper"),
    ("frames", "Frame Analysis", "Extracting key frames and analyzing visual content"),
    ("ocr", "Text Recognition", "Performing OCR on extracted frames"),
    ("ai_generation", "AI Description Generation", "Generating product description using GPT-4"),
)


def processing_steps(current: Optional[str] = None) -> list[ProcessingStep]:
    step_ids = [step_id for step_id, _, _ in VIDEO_PIPELINE_STEPS]
    if current is not None and current not in step_ids:
        raise ListingServiceError(
            code="INVALID_INPUT",
            message=f"Unknown processing step: {current}",
            details={"allowed": step_ids},
            http_status=400,
        )
    current_idx = step_ids.index(current) if current is not None else None

    steps: list[ProcessingStep] = []
    for idx, (step_id, label, description) in enumerate(VIDEO_PIPELINE_STEPS):
        if current_idx is None or idx > current_idx:
            status = "pending"
        elif idx == current_idx:
            status = "processing"
        else:
            status = "completed"
        steps.append(
            ProcessingStep(id=step_id, label=label, status=status, description=description)
        )
    return steps
