# sitwatch/main.py
# Command line: watch the SitWatch latest-videos feed and log every new video
# until interrupted (or WATCH_RUN_SECONDS elapse).

from __future__ import annotations
import asyncio
import signal

from . import config
from .client import NEW_VIDEO, SitWatch
from .utils.log import get_logger

logger = get_logger("sitwatch")


def _log_video(video: dict) -> None:
    uploader = (video.get("uploader") or {}).get("username")
    logger.info(
        "New video %s: %s%s",
        video["id"], video.get("title", ""), f" (by {uploader})" if uploader else "",
    )


async def run(client: SitWatch, run_seconds: float = 0) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops lack add_signal_handler; Ctrl-C still raises KeyboardInterrupt
            pass

    listener = client.on(NEW_VIDEO, _log_video)
    logger.info(
        "Watching %s/videos/latest every %d ms (Ctrl-C to stop)",
        client.base_url, listener.get_interval(),
    )
    try:
        if run_seconds > 0:
            try:
                await asyncio.wait_for(stop.wait(), timeout=run_seconds)
            except asyncio.TimeoutError:
                pass
        else:
            await stop.wait()
    finally:
        listener.stop()
        client.close()
        logger.info("Stopped.")


def main() -> None:
    client = SitWatch()
    if not client.has_valid_token():
        logger.info("SITWATCH_TOKEN not set; polling anonymously.")
    try:
        asyncio.run(run(client, config.WATCH_RUN_SECONDS))
    except KeyboardInterrupt:
        logger.info("Interrupted.")


if __name__ == "__main__":
    main()
