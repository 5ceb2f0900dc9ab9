__pysys_title__   = r""" BuildInfoProp - placeholder file when kati is disabled """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that with KATI_ENABLED=false the output is a single placeholder comment line, no 
	properties are written and nothing is installed. Also checks --print shows the same placeholder, and that a 
	copy installed by an earlier kati-enabled build is removed from the image and the installed files manifest.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='buildinfo-enabled', args=self.PRODUCT_PROPERTIES)
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop')
		self.assertGrep('build-output/target/product/generic/installed-files.txt', expr=r'^/system/buildinfo.prop$')

		self.buildinfo(stdouterr='buildinfo', args=self.PRODUCT_PROPERTIES+['KATI_ENABLED=false'])
		self.buildinfo(stdouterr='buildinfo-print', args=self.PRODUCT_PROPERTIES+['KATI_ENABLED=false', '--print'])

	def validate(self):
		self.assertDiff('build-output/intermediates/buildinfo.prop/buildinfo.prop', 'buildinfo.prop')
		self.assertDiff('buildinfo-print.out', 'buildinfo.prop')
		self.assertGrep('buildinfo.out', expr=r'writing buildinfo.prop')

		self.assertGrep('buildinfo.log', expr=r'Not installing .*buildinfo.prop as it is not installable')
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop', exists=False)
		self.assertGrep('build-output/target/product/generic/installed-files.txt', expr=r'.', contains=False)
		self.assertGrep('build-output/buildinfo-modules.mk', expr=r'^LOCAL_UNINSTALLABLE_MODULE := true$')
