import random
import unittest

from icnsmake.core import packbits
from icnsmake.core.errors import TruncatedInput

BASIC_RAW = bytes([0x01, 0x02, 0x02, 0x03, 0x03, 0x03, 0x04, 0x04, 0x04, 0x04, 0x05, 0x05, 0x05, 0x05, 0x05])
BASIC_PACKED = bytes([0x02, 0x01, 0x02, 0x02, 0x80, 0x03, 0x81, 0x04, 0x82, 0x05])

REPEAT_RAW = bytes([0x01] * 131)
REPEAT_PACKED = bytes([0xFF, 0x01, 0x00, 0x01])

NO_REPEAT_RAW = bytes(range(0x83))
NO_REPEAT_PACKED = bytes([0x7F]) + bytes(range(0x80)) + bytes([0x02, 0x80, 0x81, 0x82])

def packets(stream: bytes):
	''' Yields (is_run, payload) for every packet of a well-formed stream. '''
	i = 0
	while i < len(stream):
		header = stream[i]
		if header >= 0x80:
			yield True, stream[i+1:i+2] * (header - 0x80 + 3)
			i += 2
		else:
			yield False, stream[i+1:i+2+header]
			i += 2 + header

class Encode(unittest.TestCase):
	def testBasic(self):
		self.assertEqual(packbits.encode(BASIC_RAW), BASIC_PACKED)

	def testMaximumRun(self):
		self.assertEqual(packbits.encode(REPEAT_RAW), REPEAT_PACKED)

	def testMaximumLiteral(self):
		self.assertEqual(packbits.encode(NO_REPEAT_RAW), NO_REPEAT_PACKED)

	def testEmpty(self):
		self.assertEqual(packbits.encode(b''), b'')

	def testShortTails(self):
		self.assertEqual(packbits.encode(b'\x07'), b'\x00\x07')
		self.assertEqual(packbits.encode(b'\x07\x07'), b'\x01\x07\x07')
		self.assertEqual(packbits.encode(b'\x07\x07\x07'), b'\x80\x07')

	def testPairsStayLiteral(self):
		self.assertEqual(packbits.encode(b'\x01\x01\x02\x02\x03\x03'), b'\x05\x01\x01\x02\x02\x03\x03')

	def testLiteralStopsBeforeTriplet(self):
		self.assertEqual(packbits.encode(b'\x01\x02\x09\x09\x09'), b'\x01\x01\x02\x80\x09')

	def testRunOf130And132(self):
		self.assertEqual(packbits.encode(b'\xAA' * 130), b'\xFF\xAA')
		self.assertEqual(packbits.encode(b'\xAA' * 132), b'\xFF\xAA\x01\xAA\xAA')
		self.assertEqual(packbits.encode(b'\xAA' * 133), b'\xFF\xAA\x80\xAA')

	def testAcceptsBytearray(self):
		self.assertEqual(packbits.encode(bytearray(BASIC_RAW)), BASIC_PACKED)

	def testDeterministic(self):
		data = bytes(random.Random(7).choice(b'\x00\x01\x02') for _ in range(2000))
		self.assertEqual(packbits.encode(data), packbits.encode(data))

	def testPacketLimits(self):
		rng = random.Random(1)
		for _ in range(50):
			data = bytes(rng.choice(b'\x00\x00\x00\x01\x02') for _ in range(rng.randrange(1, 1500)))
			for is_run, payload in packets(packbits.encode(data)):
				if is_run:
					self.assertTrue(3 <= len(payload) <= 130)
				else:
					self.assertTrue(1 <= len(payload) <= 128)
					for j in range(len(payload) - 2):
						self.assertFalse(payload[j] == payload[j+1] == payload[j+2], 'literal packet hides a run of three')

class Decode(unittest.TestCase):
	def testBasic(self):
		self.assertEqual(packbits.decode(BASIC_PACKED), BASIC_RAW)

	def testMaximumRun(self):
		self.assertEqual(packbits.decode(REPEAT_PACKED), REPEAT_RAW)

	def testMaximumLiteral(self):
		self.assertEqual(packbits.decode(NO_REPEAT_PACKED), NO_REPEAT_RAW)

	def testNoEscapeByte(self):
		# 0x80 is a run of three, not a no-op as in TIFF PackBits
		self.assertEqual(packbits.decode(b'\x80\x07'), b'\x07\x07\x07')

	def testEmpty(self):
		self.assertEqual(packbits.decode(b''), b'')

	def testTruncatedLiteral(self):
		with self.assertRaises(TruncatedInput):
			packbits.decode(b'\x02\x01\x02')

	def testTruncatedRun(self):
		with self.assertRaises(TruncatedInput):
			packbits.decode(b'\x00\x01\x81')

class RoundTrip(unittest.TestCase):
	def testVectors(self):
		for raw in (BASIC_RAW, REPEAT_RAW, NO_REPEAT_RAW):
			self.assertEqual(packbits.decode(packbits.encode(raw)), raw)

	def testEdgeLengths(self):
		rng = random.Random(3)
		for length in (0, 1, 2, 3, 127, 128, 129, 130, 131, 256, 257):
			for data in (bytes(rng.randrange(256) for _ in range(length)), b'\x5A' * length, bytes(i % 3 for i in range(length))):
				self.assertEqual(packbits.decode(packbits.encode(data)), data, f'length {length}')

	def testRandom(self):
		rng = random.Random(42)
		for _ in range(200):
			alphabet = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 6)))
			data = bytes(rng.choice(alphabet) for _ in range(rng.randrange(0, 5000)))
			self.assertEqual(packbits.decode(packbits.encode(data)), data)

class SplitPlanes(unittest.TestCase):
	def testThreePlanes(self):
		planes = [b'\x01' * 256, bytes(range(256)), b'\x02\x02' * 128]
		packed = b''.join(packbits.encode(p) for p in planes)
		decoded, consumed = packbits.split_planes(packed, 256, 3)
		self.assertEqual(decoded, planes)
		self.assertEqual(consumed, len(packed))

	def testTruncated(self):
		packed = packbits.encode(b'\x01' * 256)
		with self.assertRaises(TruncatedInput):
			packbits.split_planes(packed, 256, 2)

	def testPlaneOverrun(self):
		# A 130-byte run cannot end a 128-byte plane
		with self.assertRaises(ValueError):
			packbits.split_planes(b'\xFF\x01', 128, 1)

	def testPlaneUnderrunIsTruncated(self):
		with self.assertRaises(TruncatedInput):
			packbits.split_planes(b'\xFF\x01', 256, 1)

if __name__ == '__main__':
	unittest.main()
