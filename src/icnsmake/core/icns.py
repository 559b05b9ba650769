from dataclasses import dataclass, field
from struct import Struct, error as StructError

from .errors import InvalidContainer

s_file_header = Struct(">4sI")
s_icon_data_header = Struct(">4sI")
s_toc_entry = Struct(">4sI")

MAGIC = b'icns'
TOC_TAG = b'TOC '

@dataclass(frozen=True)
class IcnsChunk():
	'''
	A single (OSType, data) record. Data can be images, masks, metadata, etc.
	On the wire it is the tag, a big-endian length that includes the 8-byte
	header, and then the data.
	'''
	tag: bytes
	data: bytes

	def __post_init__(self):
		assert isinstance(self.tag, bytes) and len(self.tag) == 4, f'Chunk tags must be 4 bytes, got {self.tag!r}'

	@property
	def wire_length(self) -> int:
		return s_icon_data_header.size + len(self.data)

	def build(self) -> bytes:
		return s_icon_data_header.pack(self.tag, self.wire_length) + self.data

@dataclass
class IconFamily():
	''' Holds the chunks that will be compiled into an icns file, in insertion order. '''
	chunks: list[IcnsChunk] = field(default_factory=list)

	def add(self, chunk: IcnsChunk) -> 'IconFamily':
		self.chunks.append(chunk)
		return self

	def contents_table(self) -> IcnsChunk:
		''' Lists the tag and on-wire length of every chunk. The table does not list itself. '''
		entries = b''.join(s_toc_entry.pack(chunk.tag, chunk.wire_length) for chunk in self.chunks)
		return IcnsChunk(TOC_TAG, entries)

	def build(self) -> bytes:
		chunks = [self.contents_table(), *self.chunks]
		file_length = sum(chunk.wire_length for chunk in chunks)

		buffer = bytearray()
		buffer.extend(s_file_header.pack(MAGIC, file_length))
		for chunk in chunks:
			buffer.extend(chunk.build())

		assert len(buffer) == file_length + s_file_header.size
		return bytes(buffer)

class ICNS:
	''' Walks the framing of an existing icns file. Payloads are returned as-is. '''

	@classmethod
	def read_chunks(cls, data: bytes) -> list[IcnsChunk]:
		try:
			magic, file_length = s_file_header.unpack_from(data)
		except StructError as e:
			raise InvalidContainer(f'File is too short to be an icns container! ({len(data)} bytes)') from e

		if magic != MAGIC: raise InvalidContainer(f'Bad magic {magic!r}, expected {MAGIC!r}!')
		if file_length != len(data) - s_file_header.size:
			raise InvalidContainer(f'Header declares {file_length} bytes of chunks, but {len(data) - s_file_header.size} are present!')

		chunks = []
		i = s_file_header.size
		while i < len(data):
			if i + s_icon_data_header.size > len(data):
				raise InvalidContainer(f'Truncated chunk header at offset {i}!')
			chunk_type, chunk_length = s_icon_data_header.unpack_from(data, i)
			if chunk_length < s_icon_data_header.size or i + chunk_length > len(data):
				raise InvalidContainer(f'Chunk {chunk_type!r} at offset {i} has invalid length {chunk_length}!')
			chunks.append(IcnsChunk(chunk_type, bytes(data[i+8 : i+chunk_length])))
			i += chunk_length

		return chunks

	@classmethod
	def get_chunk(cls, data: bytes, ident: bytes) -> bytes|None:
		for chunk in cls.read_chunks(data):
			if chunk.tag == ident: return chunk.data
		return None

	@classmethod
	def read_contents_table(cls, data: bytes) -> list[tuple[bytes, int]]:
		''' Returns the (tag, length) entries of the TOC chunk. '''
		toc = cls.get_chunk(data, TOC_TAG)
		if toc is None: raise InvalidContainer('Container has no table of contents!')
		if len(toc) % s_toc_entry.size:
			raise InvalidContainer(f'TOC length {len(toc)} is not a multiple of {s_toc_entry.size}!')
		return [s_toc_entry.unpack_from(toc, i) for i in range(0, len(toc), s_toc_entry.size)]
