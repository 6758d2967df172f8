from framesampler.core.value_objects.sampling_plan import SamplingPlan, SamplingStrategy

__all__ = ["SamplingPlan", "SamplingStrategy"]
