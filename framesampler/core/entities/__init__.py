from framesampler.core.entities.video_info import VideoInfo

__all__ = ["VideoInfo"]
