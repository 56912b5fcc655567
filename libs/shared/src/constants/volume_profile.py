"""Standardized U-shaped Intraday Volume Profile (Cumulative)

Fraction of a typical day's volume traded by a given minute of the
regular session: 1-minute resolution for the first 15 minutes, then
5-minute buckets.
"""

CUMULATIVE_VOLUME_PROFILE: tuple[float, ...] = (
    # 1-minute resolution, minutes 0-14
    0.008, 0.016, 0.024, 0.032, 0.040,
    0.047, 0.054, 0.061, 0.068, 0.075,
    0.081, 0.087, 0.093, 0.099, 0.105,
    # 5-minute resolution from minute 15
    0.130, 0.153, 0.173, 0.191, 0.208, 0.224,
    0.239, 0.253, 0.266, 0.279, 0.291, 0.303, 0.315, 0.327,
    0.339, 0.350, 0.361, 0.372, 0.383, 0.394, 0.405, 0.416, 0.427, 0.438,
    0.449, 0.460, 0.471, 0.482, 0.493, 0.504, 0.515, 0.526, 0.537, 0.548,
    0.559, 0.570, 0.581, 0.592, 0.603, 0.614, 0.625, 0.636, 0.647, 0.658,
    0.669, 0.680, 0.691, 0.702, 0.713, 0.724, 0.735, 0.746, 0.757, 0.768,
    0.779, 0.790, 0.801, 0.812, 0.823, 0.834, 0.845, 0.856, 0.867, 0.878,
    0.889, 0.900, 0.912, 0.924, 0.936, 0.948, 0.962, 0.978, 1.000, 1.000,
)

ONE_MINUTE_BUCKETS = 15
BUCKET_MINUTES = 5
