__pysys_title__   = r""" BuildInfoProp - identical configuration gives identical output """
#                        ================================================================================

__pysys_purpose__ = r""" Runs two clean builds with the same configuration in different output directories, and then 
	a rebuild of the first, and checks the generated files are byte-for-byte identical each time.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		for (name, outputDir) in [('first', 'build-a'), ('second', 'build-b'), ('rebuild', 'build-a')]:
			self.buildinfo(stdouterr='buildinfo-%s'%name, setOutputDir=False, 
				args=self.PRODUCT_PROPERTIES+['OUTPUT_DIR=%s/%s'%(self.output, outputDir), 'PLATFORM_VERSION_ACTIVE_CODENAMES=UpsideDownCake,VanillaIceCream'])

	def validate(self):
		self.assertDiff('build-a/intermediates/buildinfo.prop/buildinfo.prop', 'build-b/intermediates/buildinfo.prop/buildinfo.prop', filedir2=self.output)
		self.assertDiff('build-a/buildinfo-modules.mk', 'build-b/buildinfo-modules.mk', filedir2=self.output,
			replace=[('build-[ab]', 'build-X')])
		self.assertGrep('build-a/intermediates/buildinfo.prop/buildinfo.prop', expr=r'^ro.build.version.all_codenames=UpsideDownCake,VanillaIceCream$')
		self.assertGrep('buildinfo-rebuild.out', expr=r'\*\*\* BUILDINFO SUCCEEDED')
