from io import BytesIO
from pathlib import Path
import logging as log

import numpy as np
import PIL.Image
from PIL.Image import Resampling

from .image import Image, IOBackend
from ..enums import ResizeFilter
from ..errors import PngEncodeFailed

RESAMPLING = {
	ResizeFilter.Nearest:		Resampling.NEAREST,
	ResizeFilter.Triangle:		Resampling.BILINEAR,
	ResizeFilter.CatmullRom:	Resampling.BICUBIC,
	ResizeFilter.Lanczos3:		Resampling.LANCZOS,
}

MODES = { 1: 'L', 2: 'LA', 3: 'RGB', 4: 'RGBA' }

def image_to_pil(image: Image) -> PIL.Image.Image:
	''' Converts an Image to a PIL image. (U8) '''
	data = image.to_uint8().data
	match image.channels:
		case 1: return PIL.Image.fromarray(np.ascontiguousarray(data.reshape(data.shape[:2])))
		case 2 | 3 | 4: return PIL.Image.fromarray(np.ascontiguousarray(data))
		case count:
			raise TypeError(f'Cannot convert Image to PIL with {count} channels!')

def pil_to_image(im: PIL.Image.Image) -> Image:
	''' Converts a PIL image to an Image. (U8, or U16 for 16-bit grayscale) '''
	# 16-bit grayscale ("I;16*" or "I"); keep the depth so Image.to_uint8 can rescale it
	if im.mode == 'I' or im.mode.startswith('I;16'):
		return Image(np.asarray(im).clip(0, 0xffff).astype(np.uint16))
	if im.mode not in MODES.values():
		im = im.convert('RGBA' if im.has_transparency_data else 'RGB')
	return Image(np.asarray(im, dtype=np.uint8).copy())

class PilIOBackend(IOBackend):
	@staticmethod
	def load(path: str|Path) -> Image:
		with PIL.Image.open(path) as im:
			im.load()
			log.debug(f'Loaded {path} ({im.mode} {im.width}x{im.height})')
			return pil_to_image(im)

	@staticmethod
	def save(image: Image, path: str|Path) -> bool:
		image_to_pil(image).save(path)
		return True

	@staticmethod
	def resize(image: Image, dims: tuple[int, int], filter: ResizeFilter=ResizeFilter.Nearest) -> Image:
		resized = image_to_pil(image).resize(dims, RESAMPLING[filter])
		return pil_to_image(resized)

	@staticmethod
	def encode_png(image: Image) -> bytes:
		buffer = BytesIO()
		try:
			image_to_pil(image).save(buffer, format='PNG')
		except (OSError, ValueError, TypeError) as e:
			raise PngEncodeFailed(str(e)) from e
		return buffer.getvalue()
