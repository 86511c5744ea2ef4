import asyncio
import threading
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import uvicorn

from rails.channel import QueueInput
from rails.errors import GameAborted
from rails.game import Game

UPDATE_TIMEOUT = 5.0

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NewGame(BaseModel):
    players: List[str]
    seed: Optional[int] = None


class PlayerInput(BaseModel):
    value: str


class GameSession:
    def __init__(self, game_id, player_names, seed=None):
        self.game_id = game_id
        self.inputs = QueueInput()
        self.game = Game(player_names, read_input=self.inputs, publish=self._publish, seed=seed)
        self.state = None
        self.version = 0
        self.error = None
        self.changed = threading.Condition()
        self.thread = threading.Thread(target=self._run, daemon=True)

    def start(self):
        self.thread.start()

    def _run(self):
        try:
            self.game.play()
        except GameAborted:
            self._publish(dict(self.state or {}, aborted=True))
        except Exception as e:
            self.error = repr(e)
            self._publish(dict(self.state or {}, error=self.error))
            raise
        finally:
            sessions.pop(self.game_id, None)

    def stop(self):
        self.inputs.close()

    def _publish(self, snapshot):
        with self.changed:
            self.state = snapshot
            self.version += 1
            self.changed.notify_all()

    def wait_for_update(self, version, timeout=UPDATE_TIMEOUT):
        with self.changed:
            self.changed.wait_for(lambda: self.version > version, timeout)
            return self.version, self.state

    def send_input(self, value):
        return self.inputs.put(value)


sessions: Dict[str, GameSession] = {}


def _get_session(game_id):
    session = sessions.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"unknown game {game_id}")
    return session


@app.post("/games")
async def create_game(request: NewGame):
    game_id = uuid.uuid4().hex
    try:
        session = GameSession(game_id, request.players, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    sessions[game_id] = session
    session.start()
    version, state = await asyncio.to_thread(session.wait_for_update, 0)
    return {"id": game_id, "version": version, "state": state}


@app.get("/games/{game_id}")
async def get_game(game_id: str):
    session = _get_session(game_id)
    return {"id": game_id, "version": session.version, "state": session.state}


@app.post("/games/{game_id}/input", status_code=202)
async def post_input(game_id: str, request: PlayerInput):
    session = _get_session(game_id)
    if session.game.game_over:
        raise HTTPException(status_code=409, detail="game is over")
    if not session.send_input(request.value):
        raise HTTPException(status_code=409, detail="a decision is already pending")
    return {"accepted": True}


@app.delete("/games/{game_id}", status_code=202)
async def delete_game(game_id: str):
    session = _get_session(game_id)
    sessions.pop(game_id, None)
    session.stop()
    return {"stopped": True}


@app.websocket("/ws/game/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    await websocket.accept()

    session = sessions.get(game_id)
    if session is None:
        await websocket.send_json({"type": "error", "data": f"unknown game {game_id}"})
        await websocket.close()
        return

    try:
        await websocket.send_json({"type": "state", "data": session.state})

        while True:
            data = await websocket.receive_json()

            if data.get("type") == "input":
                version = session.version
                if not session.send_input(str(data.get("value", ""))):
                    await websocket.send_json({"type": "error", "data": "a decision is already pending"})
                    continue
                _, state = await asyncio.to_thread(session.wait_for_update, version)
                await websocket.send_json({"type": "state", "data": state})

            elif data.get("type") == "state":
                await websocket.send_json({"type": "state", "data": session.state})

    except WebSocketDisconnect:
        pass


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
