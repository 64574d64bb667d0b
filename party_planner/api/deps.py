# Role: Process-wide singletons shared by the routers (one store + orchestrator, one streamer).

from party_planner.core.flow_controller import FlowController
from party_planner.core.response_streamer import ResponseStreamer

flow_controller = FlowController()
response_streamer = ResponseStreamer()
