import os
import logging
from pathlib import Path

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.exception("Invalid %s: %r", name, raw)
		return default


CRAWL_DELAY_MS = get_int_env("CRAWL_DELAY_MS", 1000)
DEFAULT_DEPTH = get_int_env("DEFAULT_DEPTH", 1)
LOG_LEVEL = get_str_env("LOG_LEVEL", "info").strip().lower()


def multi_crawl_concurrency() -> int:
	return max(1, get_int_env("MULTI_CRAWL_CONCURRENCY", 3))
