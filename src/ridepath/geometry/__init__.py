from .path import PathBuilder, build_dense_path, divisions_for_total, resize_offsets, support_positions
from .sampler import CurveSampler
