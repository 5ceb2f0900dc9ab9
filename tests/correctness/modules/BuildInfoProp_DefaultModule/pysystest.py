__pysys_title__   = r""" BuildInfoProp - default module when none is declared """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that a buildinfo.prop module is added automatically when the build file declares no 
	modules, and when there is no build file at all.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='with-buildfile', args=[
			'PLATFORM_SDK_VERSION=34', 'PLATFORM_VERSION_LAST_STABLE=14', 'PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION=23'])
		self.buildinfo(stdouterr='no-buildfile', buildfile=None, setOutputDir=False, 
			args=self.PRODUCT_PROPERTIES+['OUTPUT_DIR=%s/no-buildfile-output'%self.output])

	def validate(self):
		self.assertGrep('build-output/intermediates/buildinfo.prop/buildinfo.prop', expr=r'^ro.build.version.security_patch=2024-03-05$')
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop')

		self.assertGrep('no-buildfile-output/intermediates/buildinfo.prop/buildinfo.prop', expr=r'^ro.build.version.security_patch=2024-01-01$')
		self.assertGrep('no-buildfile.out', expr=r'\*\*\* BUILDINFO SUCCEEDED: 1 module\(s\) built')
