# travelflow/routes/websocket/collaboration.py
"""WebSocket handlers for the shared plan board (comments and polls)."""

import logging

from flask_socketio import join_room, leave_room

from travelflow.api.errors import TravelFlowError
from travelflow.api.services.collaboration_service import poll_results, relative_time

from .base import BaseWebSocketHandler, NAMESPACE

logger = logging.getLogger(__name__)


class CollaborationHandler(BaseWebSocketHandler):
    """Relays board changes to everyone who joined the same plan."""

    def __init__(self, socketio, collaboration_service, namespace=NAMESPACE):
        super().__init__(socketio, namespace)
        self.service = collaboration_service

    def board_payload(self, plan_id, user_id=None):
        board = self.service.board(plan_id)
        comments = [dict(c, relative_time=relative_time(c["timestamp"])) for c in board["comments"]]
        polls = [
            dict(p, is_open=self.service.is_open(p), results=poll_results(p, user_id))
            for p in board["polls"]
        ]
        return {"plan_id": plan_id, "comments": comments, "polls": polls}

    def broadcast(self, plan_id, change):
        payload = self.board_payload(plan_id)
        payload["change"] = change
        self.broadcast_to_plan(plan_id, "board_updated", payload)

    def register_handlers(self):
        """Register collaboration event handlers."""

        @self.socketio.on("join_plan", namespace=self.namespace)
        def handle_join_plan(data):
            self.log_event("join_plan", data)
            try:
                plan_id = self.require(data, "plan_id")
                join_room(plan_id)
                self.reply("board", self.board_payload(plan_id, data.get("user_id")))
            except TravelFlowError as e:
                self.handle_error(e, "join_plan")

        @self.socketio.on("leave_plan", namespace=self.namespace)
        def handle_leave_plan(data):
            self.log_event("leave_plan", data)
            try:
                leave_room(self.require(data, "plan_id"))
            except TravelFlowError as e:
                self.handle_error(e, "leave_plan")

        @self.socketio.on("add_comment", namespace=self.namespace)
        def handle_add_comment(data):
            self.log_event("add_comment", data)
            try:
                plan_id = self.require(data, "plan_id")
                comment = self.service.add_comment(
                    plan_id,
                    author=self.require(data, "author"),
                    content=data.get("content", ""),
                    day=data.get("day"),
                    activity_id=data.get("activity_id"),
                )
                self.broadcast(plan_id, {"type": "comment", "id": comment["id"]})
            except TravelFlowError as e:
                self.handle_error(e, "add_comment")

        @self.socketio.on("create_poll", namespace=self.namespace)
        def handle_create_poll(data):
            self.log_event("create_poll", data)
            try:
                plan_id = self.require(data, "plan_id")
                poll = self.service.create_poll(
                    plan_id,
                    creator=self.require(data, "creator"),
                    title=data.get("title", ""),
                    options=data.get("options") or [],
                    description=data.get("description", ""),
                    multiple_choice=data.get("multiple_choice", False),
                    anonymous=data.get("anonymous", False),
                    end_time=data.get("end_time"),
                )
                self.broadcast(plan_id, {"type": "poll", "id": poll["id"]})
            except TravelFlowError as e:
                self.handle_error(e, "create_poll")

        @self.socketio.on("vote", namespace=self.namespace)
        def handle_vote(data):
            self.log_event("vote", data)
            try:
                plan_id = self.require(data, "plan_id")
                poll = self.service.vote(
                    plan_id,
                    self.require(data, "poll_id"),
                    self.require(data, "option_id"),
                    self.require(data, "user_id"),
                )
                self.broadcast(plan_id, {"type": "vote", "id": poll["id"]})
            except TravelFlowError as e:
                self.handle_error(e, "vote")

        @self.socketio.on("close_poll", namespace=self.namespace)
        def handle_close_poll(data):
            self.log_event("close_poll", data)
            try:
                plan_id = self.require(data, "plan_id")
                poll = self.service.close_poll(plan_id, self.require(data, "poll_id"))
                self.broadcast(plan_id, {"type": "poll_closed", "id": poll["id"]})
            except TravelFlowError as e:
                self.handle_error(e, "close_poll")
