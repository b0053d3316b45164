"""Write the API's OpenAPI document to disk, for frontend client generation."""

import json
import typing as t
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandParser
from ninja.responses import NinjaJSONEncoder

from api.api import api


class Command(BaseCommand):
    help = "Write the OpenAPI schema of the rndclub API to a JSON file."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--output",
            type=Path,
            default=settings.BASE_DIR / ".artifacts" / "openapi.json",
            help="Target file (default: .artifacts/openapi.json in the repository root).",
        )

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        output_file: Path = options["output"]
        output_file.parent.mkdir(parents=True, exist_ok=True)
        schema = api.get_openapi_schema()
        output_file.write_text(json.dumps(schema, indent=2, cls=NinjaJSONEncoder))
        self.stdout.write(
            self.style.SUCCESS(f"OpenAPI schema with {len(schema.get('paths', {}))} path(s) written to {output_file}")
        )
