import imageio.v3 as imageio
from pathlib import Path
import logging as log

from .image import Image
from .pilio import PilIOBackend
import numpy as np

class ImIOBackend(PilIOBackend):
	'''
	Reads and writes through imageio, which accepts more source formats
	(16-bit and float images, HDR, multi-frame TIFFs) than plain PIL.
	Resampling and PNG encoding are still done by PIL.
	'''

	@staticmethod
	def load(path: str|Path) -> Image:
		src = imageio.imread(Path(path) if isinstance(path, str) else path, index=0)

		# 32-bit integer images ("I" mode) have no natural range; treat them as 16-bit.
		if src.dtype.kind == 'i':
			src = src.clip(0, 0xffff).astype(np.uint16)

		log.debug(f'Loaded {path} ({src.dtype} {src.shape})')
		return Image(np.asarray(src))

	@staticmethod
	def save(image: Image, path: str|Path) -> bool:
		try:
			imageio.imwrite(path if isinstance(path, Path) else Path(path), image.data if image.channels > 1 else image.get_channel(0))
		except TypeError as e:
			# Wrap the error message, since the default one is totally useless.
			_, _, ext = str(path).rpartition('.')
			raise TypeError(f'Invalid datatype - attempted to save {image.data.dtype} data to a ".{ext}" file! '+str(e))
		return True
