"""Configuration loading for rss_mash."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Aggregated RSS Feed"
DEFAULT_DESCRIPTION = "A combined RSS feed from multiple sources."
DEFAULT_LINK = "http://example.com/aggregated-feed"


@dataclass
class ChannelConfig:
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    link: str = DEFAULT_LINK


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    timeout: float = 10.0
    user_agent: Optional[str] = None
    channel: ChannelConfig = field(default_factory=ChannelConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _text(node: Optional[ET.Element], tag: str) -> Optional[str]:
    if node is None:
        return None
    value = node.findtext(tag)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_app_config(path: str) -> AppConfig:
    """Parse the application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    try:
        root = ET.parse(config_path).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"Config file is not valid XML: {exc}") from exc

    config = AppConfig()

    timeout = _text(root, "timeout")
    if timeout is not None:
        try:
            config.timeout = float(timeout)
        except ValueError as exc:
            raise ValueError(f"Invalid <timeout> value: {timeout}") from exc
        if config.timeout <= 0:
            raise ValueError("<timeout> must be positive.")

    config.user_agent = _text(root, "user-agent")

    channel_node = root.find("channel")
    config.channel.title = _text(channel_node, "title") or DEFAULT_TITLE
    config.channel.description = (
        _text(channel_node, "description") or DEFAULT_DESCRIPTION
    )
    config.channel.link = _text(channel_node, "link") or DEFAULT_LINK

    log_node = root.find("logging")
    config.logging.level = _text(log_node, "level") or "INFO"
    log_file = _text(log_node, "file")
    if log_file:
        config.logging.file = _resolve_path(config_path, log_file)

    return config
