from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific vision extraction clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image_base64: str,
        image_media_type: str,
        json_schema: dict[str, object],
    ) -> str:
        """Send the prompt plus one image and return the provider response as text."""
