"""Transport layer: channels and the sender/receiver protocol."""

from .channel import Channel, LoopbackChannel, McpChannel
from .receiver import ReceiverSession
from .sender import Sender, SenderState, TransmitReport, TransmitStatus
