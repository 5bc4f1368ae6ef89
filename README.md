# misalignins

Building blocks for loosely coupled GNSS/INS navigation on a vehicle whose IMU
may be mounted at an arbitrary angle.

## Modules

- `misalignins.rotation` – the `Quaternion` dataclass (`normalized`,
  `to_matrix`, multiplication with `*`) and functions between direction cosine
  matrices, quaternions, ZYX Euler angles `[roll, pitch, yaw]` and rotation
  vectors: `matrix_to_quaternion`, `quaternion_to_matrix`, `matrix_to_euler`
  (yaw in `[0, 2π)`; at the pitch singularity roll is set to 0 and a warning is
  logged), `quaternion_to_euler`, `rotvec_to_quaternion`,
  `quaternion_to_rotvec`, `euler_to_matrix`, `euler_to_quaternion`. Also
  `skew_symmetric`, `quaternion_left`, `quaternion_right`, and the constants
  `D2R` and `R2D`.
- `misalignins.earth` – WGS84 helpers: `gravity`, `meridian_prime_vertical_radius`,
  `rn`, `cne`, `qne`, `blh_from_qne`, `blh2ecef`, `ecef2blh`, `dri`, `dr`,
  `local2global`, `global2local`, `iewe`, `iewn`. Geodetic positions are
  `[lat, lon, h]` in radians and metres; the local frame is NED.
- `misalignins.models` – dataclasses `ImuSample`, `GnssSample`,
  `NavigationState` and `Misalignment`; array fields are checked for shape.
- `misalignins.eskf` – `GnssInsEskf`, an 11-state error-state Kalman filter
  (north/east position, north/east velocity, heading, accelerometer and
  gyroscope biases), and `radii(lat)`, which returns `(R_M, R_N)`.
  - `initialize(p)` sets the 11×11 covariance and zeroes the error state.
  - `predict(...)` propagates the covariance over `dt`.
  - `update_gnss(...)` fuses GNSS position, heading and ground speed and
    returns the innovation `[dN, dE, dPsi, dVg]`.
  - `apply_correction(...)` returns a `CorrectedState` (position, velocity,
    re-orthonormalised attitude matrix and both biases) with the error
    estimate subtracted, and resets the error state to zero. The arrays passed
    in are not modified.
  - `state_error` and `covariance` return copies; `q_cont` and `r_gnss` hold
    the process and measurement noise and may be replaced.
- `misalignins.motion` – `MotionRecognizer`, which classifies IMU samples via
  `update`, `is_still`, `is_turning` and `is_straight`, using exponential
  moving statistics of the sensor increments. A turn is confirmed after 5
  successive detections.
- `misalignins.gins` – `ArbitrarilyMountedGins`, which sets up a
  `GnssInsEskf`, a `MotionRecognizer` tuned for 20 ms sampling, a
  `Misalignment`, a `NavigationState` and zero biases.

## Installing

```
pip install .
```

NumPy is the only runtime dependency. To run the tests:

```
pip install .[test]
pytest
```

## Using the filter

```python
import numpy as np
from misalignins.eskf import GnssInsEskf, radii

ekf = GnssInsEskf()
ekf.initialize(np.eye(11) * 0.1)

accel_b = np.array([0.1, 0.05, -9.8])
gyro_b = np.array([0.001, 0.002, 0.0005])
c_b_n = np.eye(3)
vel_ned = np.array([10.0, 1.0, 0.0])
pos_llh = np.array([np.radians(34.0), np.radians(-118.0), 100.0])
accel_bias = np.zeros(3)
gyro_bias = np.zeros(3)

for _ in range(100):
    ekf.predict(accel_b, gyro_b, c_b_n, vel_ned, pos_llh, accel_bias, gyro_bias, 0.01)

gnss_pos = pos_llh.copy()
gnss_pos[0] += 0.5 / radii(pos_llh[0])[0]
innovation = ekf.update_gnss(pos_llh, vel_ned, 0.0, gnss_pos, 0.0, 10.05)

corrected = ekf.apply_correction(pos_llh, vel_ned, c_b_n, accel_bias, gyro_bias)
print(corrected.accel_bias_b)
```

## Command line

```
misalignins
```

runs one second of prediction and a single GNSS update on fixed synthetic
data, then prints the error state, the covariance diagonal and the corrected
accelerometer bias. It takes no options besides `--help`.

## What the package does not do

`ArbitrarilyMountedGins` only holds the filter, motion recognizer and
misalignment state; it has no method that takes IMU or GNSS samples, and
nothing in the package estimates the mounting misalignment angles. There is
no INS mechanisation and no reading of recorded sensor files: the attitude,
velocity and position passed to the filter must come from the caller.