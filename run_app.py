"""Serve the resume API with uvicorn on the configured local address."""

import asyncio
import logging
import socket
from contextlib import closing

import uvicorn
import app.config as cfg
import app.main as main_app

logger = logging.getLogger("run_app")


def pick_port(host: str, port: int) -> int:
	"""The configured port when it can be bound, otherwise one the OS hands out."""
	with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
		try:
			s.bind((host, port))
			return port
		except OSError:
			pass
	with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
		s.bind((host, 0))
		return s.getsockname()[1]


async def _serve() -> None:
	port = pick_port(cfg.SERVER_HOST, cfg.SERVER_PORT)
	if port != cfg.SERVER_PORT:
		# wizard clients keep using API_URL; they need RESUME_BUILDER_API_URL to follow
		logger.warning("serve: port %d busy, using %d", cfg.SERVER_PORT, port)
	logger.info("serve: url=http://%s:%d db=%s", cfg.SERVER_HOST, port, cfg.DB_PATH)
	config = uvicorn.Config(app=main_app.app, host=cfg.SERVER_HOST, port=port, log_level=cfg.LOG_LEVEL.lower())
	await uvicorn.Server(config).serve()


def main() -> None:
	asyncio.run(_serve())


if __name__ == "__main__":
	main()
