from framesampler.application.extraction_service import FrameExtractionService

__all__ = ["FrameExtractionService"]
