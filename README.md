# perseus

Building blocks for region-based tracking of 3D objects in colour images.
The package keeps foreground/background colour statistics and turns them into
per-pixel posterior maps. It also converts and overlays images, inverts and
multiplies small matrices, and reads and writes plain-text matrix files.

## Modules

- `perseus.histogram`
  - `HistogramVarBin` holds up to four RGB histograms of different resolution. Each bin stores a foreground and a background value.
  - `set(no_bins)` allocates the histograms. Every bin count must be a power of two.
  - `add_point` adds one weighted sample to every histogram.
  - `normalise()` turns the raw counts into probabilities. The first call replaces the table. Later calls blend the new values in with `merge_alpha_foreground` and `merge_alpha_background`.
  - `get_value(r, g, b)` looks up a colour in the histogram chosen by its brightness: the last histogram for dark colours and the first for bright ones. It accepts scalars or arrays. A colour whose brightness points to a histogram that was not allocated raises `LookupError`.
  - `clear`, `clear_normalised`, `clear_not_normalised` and `clear_not_normalised_partial` reset parts of the state. `set_normalised` replaces the normalised table.
  - `build_histogram(histogram, mask, image, object_id)` fills a histogram from an image and a label mask. A pixel labelled `object_id + 1` counts as foreground and a pixel labelled 0 as background.
  - `build_histogram_masked(...)` counts only the pixels where a second mask is above 128.
  - `update_histogram(histogram, image, mask, object_id, video_mask)` builds the histogram and then normalises it.
- `perseus.visualisation`
  - `compute_posteriors(histogram, image)` returns the foreground minus background posterior of each pixel as a `float32` array.
  - `posterior_image(histogram, image)` returns the same map stretched to a grey four-channel image.
- `perseus.imageutils`
  - `scale_to_gray`, `overlay`, `flip_colours`, `gray_to_rgba` and `rgba_to_gray` convert between image kinds.
  - `load_image`, `load_gray_image` and `save_image` read and write image files through Pillow. The file extension chooses the format when saving.
- `perseus.mathutils` multiplies, transposes and inverts flat 4x4 and square matrices, which are stored column-major:
  - `square_matrix_product`, `matrix_vector_product4`, `transpose_square_matrix`, `invert_matrix4` and `invert_matrix4_pose` work on these flat matrices.
  - `matrix_determinant3`, `invert_matrix3`, `get_minor`, `calc_determinant` and `invert_matrix` take nested matrices given as rows.
  - `matrix_vector_product` takes a nested matrix whose inner sequences are its columns.
  - `load_heaviside(path, size)` reads a lookup table of `size` values from a text file.
- `perseus.fileutils` reads and writes plain-text numeric files:
  - `write_array_file` and `read_array_file` handle a matrix and its dimensions.
  - `write_array_with_vector` and `read_array_with_vector` handle a matrix followed by a vector.
  - `write_named_rows`, `write_named_flat_matrix`, `write_named_vector` and `write_object_matrix` write named assignments.
  - `read_floats`, `read_text` and `write_text` read and write plain text.
- `perseus.params`
  - `StepSize3D` holds step sizes. Build one from a sequence ordered `r, t_x, t_y, t_z` with `from_sequence`.
  - `View3DParams` defaults to `z_far=50.0`, `z_near=0.01` and `z_buffer_offset=0.0001`.
  - `Object3DParams` defaults to four histograms with 8, 16, 32 and 64 bins.
  - `IterationConfiguration` also holds the tracker settings.
- `perseus.render`
  - `ImageRender(width, height)` holds a fill mask, object labels and near and far depth buffers.
  - `clear()` zeroes the fill mask.
  - `clear_zbuffer()` zeroes the object labels and the far buffer, and fills the near buffer with the maximum value.
- `perseus.defines` holds the `GetImageType` and `IterationTarget` enums, the helpers `rgb_to_int`, `int_to_rgb` and `clamp`, and shared constants.

## Images

Images are numpy arrays:

- Four-channel images have shape `(height, width, 4)` and hold `uint8` values.
- Grey images and masks have shape `(height, width)`.
- `load_image` returns channels in blue, green, red, alpha order, and `save_image` expects that same order.
- `overlay` writes its red value to channel 2 and its blue value to channel 0.
- The histogram functions and `compute_posteriors` read channels 0, 1 and 2 as red, green and blue.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np
from perseus.histogram import HistogramVarBin, update_histogram
from perseus.visualisation import posterior_image

image = np.zeros((120, 160, 4), dtype=np.uint8)
mask = np.zeros((120, 160), dtype=np.uint8)       # 0 = background, id + 1 = object
mask[40:80, 60:100] = 1

histogram = HistogramVarBin()
histogram.set([8, 16, 32, 64])
update_histogram(histogram, image, mask, 0, None)

preview = posterior_image(histogram, image)       # grey four-channel posterior map
```

## What it does not do

The package has no tracker of its own. It does not load or render 3D meshes, so it produces no wireframe, fill or silhouette images. It does not hold cameras or views, does not compute distance transforms or energy derivatives, and does not optimise poses. `GetImageType` and `IterationConfiguration` only describe such steps. There is no command-line program.