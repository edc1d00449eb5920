"""Offline extraction client.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from app.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Adapter that returns a fixed, valid TIV payload without network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "titulo_numero": "2023-1234567",
        "fecha": "15/03/2023 10:42:17",
        "zona_registral": "IX",
        "sede_registral": "LIMA",
        "partida_registral": "53871234",
        "dua_dam": "118-2023-10-123456",
        "placa": "ABC-123",
        "categoria": "L3",
        "marca": "HONDA",
        "modelo": "CB190R",
        "color": "NEGRO",
        "numero_vin": "LALPCJ0A8P3000001",
        "numero_serie": "LALPCJ0A8P3000001",
        "numero_motor": "SDH163FML1234567",
        "carroceria": "MOTOCICLETA",
        "potencia": "11.20@8500",
        "combustible": "GASOLINA",
        "form_rod": "2x1",
        "version": "",
        "anio_fabricacion": "2023",
        "anio_modelo": "2023",
        "asientos": "2",
        "pasajeros": "1",
        "ruedas": "2",
        "ejes": "2",
        "cilindros": "1",
        "cilindrada": "184",
        "longitud": "2.05",
        "altura": "1.07",
        "ancho": "0.78",
        "peso_bruto": "0.29",
        "peso_neto": "0.14",
        "carga_util": "0.15",
        "codigo_verificacion": "91827364",
    }

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
        _ = model, temperature, system_prompt, user_prompt, image_base64
        _ = image_media_type, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
