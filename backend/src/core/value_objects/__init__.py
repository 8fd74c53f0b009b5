from backend.src.core.value_objects.frame_span import FrameSpan
from backend.src.core.value_objects.quantization_range import QuantizationRange
from backend.src.core.value_objects.sampling_plan import SamplingPlan

__all__ = ["FrameSpan", "QuantizationRange", "SamplingPlan"]
