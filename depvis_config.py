"""
depvis_config.py
Необязательный XML-конфиг, например:

    <depvis>
        <entrypoint>four</entrypoint>
        <mode>topo</mode>
        <working_directory>/src/monorepo</working_directory>
        <image>dependency_graph</image>
        <image_format>svg</image_format>
        <debug>false</debug>
    </depvis>
"""
import os
import xml.etree.ElementTree as ET
from typing import Dict, Optional

from depvis_errors import ConfigError

MODES = ("topo", "viz", "all")


def load_config(xml_path: str) -> Dict[str, Optional[str]]:
    if not os.path.exists(xml_path):
        raise ConfigError(f"Config file not found: {xml_path}")
    try:
        root = ET.parse(xml_path).getroot()
    except ET.ParseError as e:
        raise ConfigError(f"Failed to parse XML config: {e}")

    def get_text(tag: str, default=None):
        el = root.find(tag)
        if el is None:
            return default
        return (el.text or "").strip() or default

    cfg = {
        "entrypoint": get_text("entrypoint"),
        "mode": get_text("mode"),
        "working_directory": get_text("working_directory"),
        "image": get_text("image"),
        "image_format": get_text("image_format", default="png"),
        "debug": get_text("debug", default="false"),
    }
    if cfg["mode"] is not None and cfg["mode"].lower() not in MODES:
        raise ConfigError(f"invalid mode {cfg['mode']} (must be one of topo, viz, all)")
    if cfg["debug"].lower() not in ("true", "false", "1", "0", "yes", "no"):
        raise ConfigError(f"invalid debug value {cfg['debug']} (must be true or false)")
    return cfg


def is_true(value: Optional[str]) -> bool:
    return (value or "").lower() in ("true", "1", "yes")
