from framesampler.application.dto.extraction_job import ExtractionJob, ExtractionProfile
from framesampler.application.dto.extraction_summary import ExtractionSummary

__all__ = ["ExtractionJob", "ExtractionProfile", "ExtractionSummary"]
