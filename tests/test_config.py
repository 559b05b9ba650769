import json
import tempfile
import unittest
from pathlib import Path

from icnsmake.core import config
from icnsmake.core.config import AppConfig, load_config, save_config, make_config
from icnsmake.core.enums import ResizeFilter, IOBackendKind
from icnsmake.core.variants import IconVariant
from icnsmake.core.errors import UnknownVariant

class Config(unittest.TestCase):
	def setUp(self):
		self.tmp = tempfile.TemporaryDirectory()
		self.dir = Path(self.tmp.name)

	def tearDown(self):
		self.tmp.cleanup()

	def testDefaults(self):
		conf = AppConfig()
		self.assertEqual(conf.get_variants(), IconVariant.recommended())
		self.assertEqual(conf.filter, ResizeFilter.Nearest)
		self.assertEqual(conf.backend, IOBackendKind.Pillow)
		self.assertTrue(conf.rejectEmpty)

	def testEncodeDecode(self):
		conf = AppConfig(variants=['ic08', 's8mk'], filter=ResizeFilter.Lanczos3, backend=IOBackendKind.ImageIO, rejectEmpty=False)
		encoded = json.loads(json.dumps(conf.encode()))
		self.assertEqual(encoded['filter'], 'lanczos3')
		self.assertEqual(AppConfig.decode(encoded), conf)

	def testDecodeRejectsUnknownVariant(self):
		with self.assertRaises(UnknownVariant):
			AppConfig.decode({'variants': ['ic99']})

	def testCopyIsIndependent(self):
		conf = AppConfig()
		copy = conf.copy()
		copy.variants.append('icp4')
		self.assertNotIn('icp4', conf.variants)

	def testMissingFileUsesDefaults(self):
		self.assertEqual(load_config(str(self.dir)), AppConfig())
		self.assertFalse((self.dir / config.CONFIG_NAME).exists())

	def testSaveAndLoad(self):
		path = self.dir / 'custom.json'
		load_config(str(path))
		save_config(AppConfig(variants=['is32'], filter=ResizeFilter.Triangle))
		conf = load_config(str(path))
		self.assertEqual(conf.variants, ['is32'])
		self.assertEqual(conf.filter, ResizeFilter.Triangle)

	def testMakeConfig(self):
		load_config(str(self.dir))
		make_config()
		self.assertTrue((self.dir / config.CONFIG_NAME).is_file())

	def testBrokenFileFallsBack(self):
		path = self.dir / config.CONFIG_NAME
		path.write_text('{ not json')
		with self.assertLogs(level='WARNING'):
			conf = load_config(str(self.dir))
		self.assertEqual(conf, AppConfig())

if __name__ == '__main__':
	unittest.main()
