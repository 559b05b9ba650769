from .errors import TruncatedInput

'''
Apple's PackBits variant, used for the planar RGB/ARGB icon chunks.

Unlike TIFF PackBits there is no escape byte: every header >= 0x80 is a run.
- Literal packet:	header n in [0, 127], followed by n+1 bytes.
- Run packet:		header h in [128, 255], followed by one byte repeated h-128+3 times.
'''

RUN_FLAG = 0x80
MIN_RUN = 3
MAX_RUN = 130		# 0xFF - 0x80 + 3
MAX_LITERAL = 128	# 0x7F + 1

def encode(data: bytes) -> bytes:
	'''
	Compresses a byte string. Any three identical bytes become a run packet,
	everything else is gathered into literal packets. Deterministic, not optimal.

	>>> encode(bytes([1, 2, 2, 3, 3, 3, 4, 4, 4, 4, 5, 5, 5, 5, 5])).hex(' ')
	'02 01 02 02 80 03 81 04 82 05'
	'''
	data = bytes(data)
	size = len(data)
	out = bytearray()
	i = 0

	while i < size:
		# The last one or two bytes can only be a literal
		if size - i <= 2:
			out.append(size - i - 1)
			out += data[i:]
			break

		byte = data[i]
		if data[i+1] == byte and data[i+2] == byte:
			end = i + MIN_RUN
			while end < size and data[end] == byte and end - i < MAX_RUN:
				end += 1

			out.append(end - i - MIN_RUN + RUN_FLAG)
			out.append(byte)
			i = end
			continue

		end = i + 1
		while end < size and end - i < MAX_LITERAL:
			# Stop right before a triplet so the next packet can be a run
			if end + 2 < size and data[end] == data[end+1] == data[end+2]:
				break
			end += 1

		out.append(end - i - 1)
		out += data[i:end]
		i = end

	return bytes(out)

def decode(data: bytes) -> bytes:
	''' Decompresses a byte string produced by encode() or by Apple's tools. '''
	data = bytes(data)
	size = len(data)
	out = bytearray()
	i = 0

	while i < size:
		header = data[i]
		if header >= RUN_FLAG:
			if i + 2 > size:
				raise TruncatedInput(i, 2, size - i)
			out += data[i+1:i+2] * (header - RUN_FLAG + MIN_RUN)
			i += 2
		else:
			length = header + 1
			if i + 1 + length > size:
				raise TruncatedInput(i, 1 + length, size - i)
			out += data[i+1:i+1+length]
			i += 1 + length

	return bytes(out)

def split_planes(data: bytes, plane_size: int, count: int) -> tuple[list[bytes], int]:
	'''
	Decodes `count` consecutive packed planes of `plane_size` bytes each.
	Returns the planes and the number of input bytes consumed.
	Packets never straddle planes, since each plane is packed independently.
	'''
	planes: list[bytes] = []
	i = 0
	size = len(data)
	for _ in range(count):
		start = i
		produced = 0
		while produced < plane_size:
			if i >= size: raise TruncatedInput(i, 1, 0)
			header = data[i]
			if header >= RUN_FLAG:
				produced += header - RUN_FLAG + MIN_RUN
				i += 2
			else:
				produced += header + 1
				i += 2 + header
		if i > size: raise TruncatedInput(start, i - start, size - start)
		if produced != plane_size:
			raise ValueError(f'Packed plane at offset {start} expands to {produced} bytes, expected {plane_size}!')
		planes.append(decode(data[start:i]))
	return planes, i
