__pysys_title__   = r""" BuildInfoProp - non-installable module is built but not installed """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that when BuildInfoProp.installable is false the file is still generated and 
	reported by --output-files, but is not installed, is removed from the install directory if a previous 
	build installed it, is not listed in the installed files manifest, and is marked uninstallable in the make 
	metadata.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='buildinfo-installable', args=self.PRODUCT_PROPERTIES)
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop')

		self.buildinfo(stdouterr='buildinfo-not-installable', args=self.PRODUCT_PROPERTIES+['INSTALL_BUILDINFO=false'])
		self.buildinfo(stdouterr='buildinfo-output-files', args=self.PRODUCT_PROPERTIES+['INSTALL_BUILDINFO=false', '--output-files='])

	def validate(self):
		self.assertPathExists('build-output/intermediates/buildinfo.prop/buildinfo.prop')
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop', exists=False)
		self.assertGrep('buildinfo-not-installable.log', expr=r'Not installing .*buildinfo.prop as it is not installable')

		self.assertGrep('build-output/target/product/generic/installed-files.txt', expr=r'buildinfo.prop', contains=False)
		self.assertGrep('build-output/buildinfo-modules.mk', expr=r'^LOCAL_UNINSTALLABLE_MODULE := true$')

		self.assertLineCount('buildinfo-output-files.out', expr=r'.', condition='==1')
		self.assertGrep('buildinfo-output-files.out', expr=r'^%s$'%re.escape(os.path.join(self.output, 'build-output', 'intermediates', 'buildinfo.prop', 'buildinfo.prop')))
