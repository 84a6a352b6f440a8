"""Management command to compute the MAI using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api import views
from backend.core.exceptions import MAIError


class Command(BaseCommand):
    help = "Compute the daily Mosquito Activity Index for a region or coordinates"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--region", type=str, help="Free-text region name")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        region = options.get("region")
        latitude = options.get("lat")
        longitude = options.get("lon")

        try:
            if region:
                payload = views.serialize_report(views.get_pipeline().run(region))
            else:
                if latitude is None or longitude is None:
                    raise CommandError("--lat and --lon are required unless --region is given")
                index = views.get_pipeline().index_for(latitude, longitude)
                payload = {day.isoformat(): level.label for day, level in index.items()}
        except MAIError as exc:
            raise CommandError(f"{type(exc).__name__}: {exc}") from exc

        self.stdout.write(json.dumps(payload))
