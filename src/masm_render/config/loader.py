import logging
from typing import Any, Dict

import yaml

from .models import RenderConfig

logger = logging.getLogger(__name__)

KNOWN_KEYS = {
    "architecture",
    "max_opcode_bytes",
    "mnemonic_width",
    "max_expression_depth",
    "basic_block_lines",
    "labels",
}

class ConfigLoader:
    def load_from_file(self, path: str) -> RenderConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> RenderConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> RenderConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration document: {data!r}")

        for key in data:
            if key not in KNOWN_KEYS:
                logger.warning("Ignoring unknown configuration key '%s'", key)

        defaults = RenderConfig()
        labels = {}
        for address, name in (data.get("labels") or {}).items():
            addr = self._parse_int(address)
            if addr == 0:
                raise ValueError(f"Label address 0 is reserved: {name}")
            if not 0 < addr < (1 << 64):
                raise ValueError(f"Label address out of 64-bit range: {address} ({name})")
            labels[addr] = str(name)

        return RenderConfig(
            architecture=str(data.get("architecture", defaults.architecture)),
            max_opcode_bytes=self._parse_int(data.get("max_opcode_bytes", defaults.max_opcode_bytes)),
            mnemonic_width=self._parse_int(data.get("mnemonic_width", defaults.mnemonic_width)),
            max_expression_depth=self._parse_int(data.get("max_expression_depth", defaults.max_expression_depth)),
            basic_block_lines=bool(data.get("basic_block_lines", defaults.basic_block_lines)),
            labels=labels,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
