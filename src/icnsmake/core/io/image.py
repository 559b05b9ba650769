import numpy as np
from numpy.typing import DTypeLike
from pathlib import Path
from typing import Literal
from abc import abstractmethod

from ..enums import ResizeFilter

Mode = Literal['L', 'LA', 'RGB', 'RGBA']

class IOBackend():
	'''
	Represents an abstract I/O interface for loading images from the user's
	filesystem, resampling them and encoding the PNG variants of an icon.
	'''

	@staticmethod
	@abstractmethod
	def save(image: 'Image', path: str|Path) -> bool:
		...

	@staticmethod
	@abstractmethod
	def load(path: str|Path) -> 'Image':
		...

	@staticmethod
	@abstractmethod
	def resize(image: 'Image', dims: tuple[int, int], filter: ResizeFilter=ResizeFilter.Nearest) -> 'Image':
		...

	@staticmethod
	@abstractmethod
	def encode_png(image: 'Image') -> bytes:
		...

class Image():
	'''
	A decoded raster, stored as a (height, width, channels) numpy array.
	The heavy lifting (decoding, resampling, PNG) is done by the active IOBackend.
	'''

	backend: type[IOBackend] # static

	@staticmethod
	def set_backend(backend: type[IOBackend]):
		Image.backend = backend

	@staticmethod
	def load(path: str|Path) -> 'Image':
		return Image.backend.load(path)

	@staticmethod
	def blank(size: tuple[int, int], color: tuple[int|float, ...]=(1, 1, 1), dtype: DTypeLike='float32') -> 'Image':
		''' Creates a blank image by size, type, and color. '''
		data = np.ndarray((size[1], size[0], len(color)), dtype, order='C')
		data.fill(1)
		data *= np.array(color, dtype=dtype)
		return Image(data)

	@staticmethod
	def merge(axes: tuple["Image", ...]) -> 'Image':
		''' Merges N images into one as color channels. '''
		width, height = axes[0].size
		for i, img in enumerate(axes):
			assert img.channels == 1, f'Expected single-channel image when merging channel {i}'
			assert img.size == (width, height), f'Expected size ({width}, {height}) when merging channel {i}, but got {img.size}'
		data = np.stack([img.data.reshape((height, width)) for img in axes], axis=2)
		return Image(data)


	data: np.ndarray

	def __init__(self, src: np.ndarray) -> None:
		''' Creates a new image from a numpy array. Use Image.load for files. '''
		if not isinstance(src, np.ndarray):
			raise NotImplementedError('Cannot construct generic image from non-ndarray. Use IO implementation!')
		if src.ndim not in (2, 3) or src.shape[0] == 0 or src.shape[1] == 0:
			raise ValueError(f'Expected a non-empty (height, width[, channels]) array, but got shape {src.shape}!')

		self.data = src

		if src.ndim == 2:
			self.data = self.data.reshape((self.size[1], self.size[0], 1))

	def resize(self, size: tuple[int, int], filter: ResizeFilter=ResizeFilter.Nearest) -> 'Image':
		''' Resizes this image if necessary. The aspect ratio is not preserved. '''
		if self.size == size: return self
		return Image.backend.resize(self, size, filter)

	def convert(self, dtype: DTypeLike, clip=False) -> 'Image':
		''' Returns a copy of this image, converted to the specified datatype. '''
		obj_dtype = np.dtype(dtype)
		data = self.data

		max_from: int = 1 if data.dtype.kind == 'f' else 2**(data.dtype.itemsize*8) - 1
		max_to: int   = 1 if obj_dtype.kind == 'f' else 2**(obj_dtype.itemsize*8) - 1

		if clip:
			data = data.clip(0, max_from)

		new_data = data.astype(np.float64) * (max_to / max_from)
		if obj_dtype.kind != 'f':
			new_data = np.rint(new_data)
		return Image(np.ascontiguousarray(new_data.astype(obj_dtype)))

	def to_uint8(self) -> 'Image':
		if self.data.dtype == np.uint8: return self
		return self.convert(np.uint8, clip=True)

	def split(self) -> list["Image"]:
		''' Returns this image's data as a list of channels '''
		return [Image(self.data[:, :, i]) for i in range(self.channels)]

	def normalize(self, mode: Mode) -> 'Image':
		''' Converts between channel layouts. Missing alpha is filled in as opaque. '''
		s = self.split()
		opaque = lambda: Image.blank(self.size, dtype=self.data.dtype, color=(self.max_value,))
		match self.channels:
			case 1:
				if mode == 'L': return self
				if mode == 'LA': return Image.merge(( s[0], opaque() ))
				if mode == 'RGB': return Image.merge(( s[0], s[0], s[0] ))
				return Image.merge(( s[0], s[0], s[0], opaque() ))
			case 2:
				if mode == 'L': return s[0]
				if mode == 'LA': return self
				if mode == 'RGB': return Image.merge(( s[0], s[0], s[0] ))
				return Image.merge(( s[0], s[0], s[0], s[1] ))
			case 3:
				if mode == 'L': return self.grayscale()
				if mode == 'LA': return Image.merge(( self.grayscale(), opaque() ))
				if mode == 'RGB': return self
				return Image.merge(( s[0], s[1], s[2], opaque() ))
			case 4:
				if mode == 'L': return Image.merge(tuple(s[:3])).grayscale()
				if mode == 'LA': return Image.merge(( Image.merge(tuple(s[:3])).grayscale(), s[3] ))
				if mode == 'RGB': return Image.merge(tuple(s[:3]))
				return self

		raise ValueError(f'Image has unrecognized number of channels ({self.channels})! Failed to convert to {mode}!')

	def grayscale(self) -> 'Image':
		''' Returns the luma of an RGB image, in the same datatype. '''
		if self.channels == 1: return self
		assert self.channels == 3
		# https://en.wikipedia.org/wiki/Luma_(video)
		r, g, b = (self.data[:, :, i].astype(np.float64) for i in range(3))
		gray = r * 0.2126 + g * 0.7152 + b * 0.0722
		if self.data.dtype.kind != 'f':
			gray = np.rint(gray)
		return Image(gray.astype(self.data.dtype))

	def has_transparency(self) -> bool:
		if self.channels not in (2, 4): return False
		alpha = self.get_channel(self.channels - 1)
		return bool(np.any(alpha != self.max_value))

	def get_channel(self, channel: int) -> np.ndarray:
		''' Returns one channel as a (height, width) array. '''
		if channel >= self.channels: raise ValueError(f'Attempted to get channel {channel+1} of {self.channels}-channel image!')
		return self.data[:, :, channel]

	def plane(self, channel: int) -> bytes:
		''' Returns one 8-bit channel as row-major bytes, top to bottom. '''
		return np.ascontiguousarray(self.to_uint8().get_channel(channel)).tobytes('C')

	def save(self, path: str|Path) -> bool:
		''' Saves this image to a file. Useful for debug. '''
		return Image.backend.save(self, path)

	@property
	def size(self) -> tuple[int, int]:
		return (np.size(self.data, 1), np.size(self.data, 0))

	@property
	def channels(self) -> int:
		return 1 if len(self.data.shape) == 2 else np.size(self.data, 2)

	@property
	def max_value(self) -> int:
		return 1 if self.data.dtype.kind == 'f' else 2**(self.data.dtype.itemsize*8) - 1
