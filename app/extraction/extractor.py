"""AI-powered TIV field extractor."""

import json
from pathlib import Path

from app.extraction.base import BaseExtractor
from app.extraction.client_base import BaseExtractionClient
from app.extraction.prompt_loader import load_json_schema, load_prompt_template
from app.extraction.validator import validate_and_build
from app.logging.logger import Log
from app.processor.exceptions import ExtractionError
from app.processor.models import REQUIRED_FIELDS, ExtractedRecord, RasterImage


class StructuredExtractor(BaseExtractor):
    """Extracts TIV fields from a page image using a vision-capable AI provider."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def extract(self, image: RasterImage) -> ExtractedRecord:
        prompt = self._build_prompt()
        Log.debug(f"Extraction prompt:\n{prompt}")

        raw_response = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            image_base64=image.base64(),
            image_media_type=image.media_type,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        record = validate_and_build(self._parse_json(raw_response))
        Log.info(f"Extraction complete for plate '{record.placa or '?'}'")
        return record

    def _build_prompt(self) -> str:
        return self._prompt_template.format(
            required_fields=", ".join(REQUIRED_FIELDS),
            json_schema=self._json_schema,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if not cleaned:
            raise ExtractionError("AI returned empty response")
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
