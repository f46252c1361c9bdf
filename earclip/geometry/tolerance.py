from __future__ import annotations

# The exact triangulation core uses no tolerances. These only apply to the
# float plane fit of the coplanar mapping utility.

# Positional epsilon for near-zero lengths and singular values.
EPS_POS = 1e-12
