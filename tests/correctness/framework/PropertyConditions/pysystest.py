__pysys_title__   = r""" Properties - conditions in .properties files """
#                        ================================================================================

__pysys_purpose__ = r""" The purpose of this test is to check that <cond> and <cond1, cond2> filters on property keys 
	select the lines matching the build variant, and that it is an error if no line for a key matches.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		for variant in ['eng', 'user']:
			self.buildinfo(stdouterr='buildinfo-%s'%variant, setOutputDir=False,
				args=['TARGET_BUILD_VARIANT=%s'%variant, 'OUTPUT_DIR=%s/build-%s'%(self.output, variant)])
		self.userdebug = self.buildinfo(stdouterr='buildinfo-userdebug', args=['TARGET_BUILD_VARIANT=userdebug'], shouldFail=True)

	def validate(self):
		PROP_FILE = 'build-%s/intermediates/buildinfo.prop/buildinfo.prop'
		self.assertGrep(PROP_FILE%'eng', expr=r'^ro.build.version.security_patch=2024-02-05$')
		self.assertGrep(PROP_FILE%'eng', expr=r'^ro.build.version.base_os=debug-base-arm64$')
		self.assertGrep(PROP_FILE%'user', expr=r'^ro.build.version.security_patch=2024-01-05$')
		self.assertGrep(PROP_FILE%'user', expr=r'^ro.build.version.base_os=release-base$')

		self.assertThat('expected in msg', msg=self.userdebug, expected='no property key found for "PLATFORM_SECURITY_PATCH" matched any of the conditions')
