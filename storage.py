import json
import logging

from model import MapTemplate

logger = logging.getLogger(__name__)


def save_template(template: MapTemplate, path: str) -> None:
    payload = template.to_dict()
    with open(path, "w", encoding="utf-8") as file:
        json.dump(payload, file, indent=2)
    logger.info("Saved template %r to %s", template.name, path)


def load_template(path: str) -> MapTemplate:
    with open(path, "r", encoding="utf-8") as file:
        payload = json.load(file)
    template = MapTemplate.from_dict(payload)
    logger.info("Loaded template %r (%d areas) from %s", template.name, len(template.areas), path)
    return template
