"""
WebSocket game server for the trapping puzzle.

Serves game_client.html and runs one TurnController per connection.
The client renders; the server only forwards placements and resets
and streams turn events back.
"""

import os
import json
import asyncio
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

import websockets
from websockets.http11 import Response
from websockets.datastructures import Headers

from cairn import (
    GameConfig, HexCoordinate, Outcome, RoundState, ScoreTracker, TurnController, load_config,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path(os.environ.get("CAIRN_CONFIG", "data/config.yaml"))
CLIENT_HTML = Path(__file__).parent / "game_client.html"


class GameSession:
    """One player's controller and score, driven by JSON messages."""

    def __init__(self, config: Optional[GameConfig] = None, controller: Optional[TurnController] = None):
        self.controller = controller or TurnController(config)
        self.scores = ScoreTracker()
        self.controller.on_round_end = self.scores.record

    def handle_message(self, msg: dict) -> list[dict]:
        """Apply one client message; return the replies in send order."""
        msg_type = msg.get("type", "")

        if msg_type == "new_round":
            self.controller.reset()
            return [{"type": "round_start", "board": self.controller.snapshot()}]

        if msg_type == "get_state":
            return [{"type": "state", "board": self.controller.snapshot()}]

        if msg_type == "pause":
            self.controller.pause()
            return [{"type": "paused", "board": self.controller.snapshot()}]

        if msg_type == "resume":
            self.controller.resume()
            return [{"type": "resumed", "board": self.controller.snapshot()}]

        if msg_type == "place_obstacle":
            try:
                cell = HexCoordinate.from_dict(msg)
            except (KeyError, TypeError, ValueError):
                return [{"type": "error", "message": "Invalid cell"}]
            return self._place(cell)

        return [{"type": "error", "message": f"Unknown message type: {msg_type}"}]

    def session_over(self) -> dict:
        return {"type": "session_over", "score": self.scores.get_summary()}

    def _place(self, cell: HexCoordinate) -> list[dict]:
        result = self.controller.place_obstacle(cell)
        if not result.accepted:
            return [{
                "type": "placement_rejected",
                "reason": result.reason.value,
                "cell": cell.to_dict(),
            }]

        replies = [{
            "type": "turn_result",
            "event": result.event.to_dict(),
            "board": self.controller.snapshot(),
        }]
        if result.event.outcome is not Outcome.MOVED:
            replies.append({
                "type": "round_over",
                "event": result.event.to_dict(),
                "score": self.scores.get_summary(),
            })
        return replies


# ── WebSocket Game Server ──


async def handle_websocket(websocket):
    """Handle a single WebSocket connection (one game session)."""
    session = GameSession(load_config(CONFIG_PATH))
    hold_task: Optional[asyncio.Task] = None

    async def send_json(msg_type: str, data: dict):
        await websocket.send(json.dumps({"type": msg_type, **data}, default=str))

    async def announce_input_open(round_number: int):
        """Tell the client when the animation hold ends."""
        controller = session.controller
        while controller.state is RoundState.ANIMATING:
            await asyncio.sleep(max(controller.hold_remaining(), 0.01))
        if controller.round_number == round_number and controller.state is RoundState.AWAITING_INPUT:
            await send_json("awaiting_input", {"board": controller.snapshot()})

    async def watch_session_clock():
        """End the session once its unpaused play time runs out."""
        controller = session.controller
        while not controller.time_up:
            await asyncio.sleep(max(controller.time_remaining(), 0.05))
        logger.info(f"Session time up after round {controller.round_number}")
        reply = session.session_over()
        await send_json(reply.pop("type"), reply)
        await websocket.close()

    clock_task: Optional[asyncio.Task] = None
    if session.controller.time_remaining() is not None:
        clock_task = asyncio.create_task(watch_session_clock())

    try:
        await send_json("round_start", {"board": session.controller.snapshot()})

        async for raw in websocket:
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                await send_json("error", {"message": "Invalid JSON"})
                continue
            if not isinstance(msg, dict):
                await send_json("error", {"message": "Message must be a JSON object"})
                continue

            if msg.get("type") == "new_round" and hold_task:
                hold_task.cancel()
                hold_task = None

            for reply in session.handle_message(msg):
                await send_json(reply.pop("type"), reply)

            if session.controller.state is RoundState.ANIMATING and (hold_task is None or hold_task.done()):
                hold_task = asyncio.create_task(
                    announce_input_open(session.controller.round_number)
                )

    except websockets.exceptions.ConnectionClosed:
        logger.info("Client disconnected")
    finally:
        for task in (hold_task, clock_task):
            if task:
                task.cancel()


def http_handler(connection, request):
    """Serve game_client.html on a plain GET / (websockets process_request)."""
    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None  # Let websockets handle WebSocket upgrade
    if request.path not in ("/", "") or not CLIENT_HTML.exists():
        return None
    body = CLIENT_HTML.read_bytes()
    return Response(
        200,
        "OK",
        Headers([
            ("Content-Type", "text/html; charset=utf-8"),
            ("Content-Length", str(len(body))),
        ]),
        body,
    )


async def main():
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8080"))

    logger.info(f"Starting server on http://{host}:{port}")

    async with websockets.serve(
        handle_websocket,
        host,
        port,
        process_request=http_handler,
        max_size=64 * 1024,
    ):
        await asyncio.Future()  # run forever


if __name__ == "__main__":
    asyncio.run(main())
