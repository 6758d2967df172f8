from framesampler.ports.outbound.file_storage_port import FileStoragePort
from framesampler.ports.outbound.frame_extraction_port import FrameExtractionPort
from framesampler.ports.outbound.task_queue_port import TaskQueuePort
from framesampler.ports.outbound.video_probe_port import VideoProbePort

__all__ = [
    "FileStoragePort",
    "FrameExtractionPort",
    "TaskQueuePort",
    "VideoProbePort",
]
