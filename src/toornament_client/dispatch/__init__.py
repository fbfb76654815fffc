"""Resource paths, verbs and the dispatcher executing them."""

from toornament_client.dispatch.dispatcher import Dispatcher
from toornament_client.dispatch.path import SINGULAR_RESOURCES, ResourcePath, Scope, Segment, render_params
from toornament_client.dispatch.request import DispatchRequest, RequestTarget, Verb

__all__ = [
    "SINGULAR_RESOURCES",
    "DispatchRequest",
    "Dispatcher",
    "RequestTarget",
    "ResourcePath",
    "Scope",
    "Segment",
    "Verb",
    "render_params",
]
