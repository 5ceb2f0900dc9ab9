__pysys_title__   = r""" Build - failure of the command that writes the file """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that if the shell command generating the file fails the build reports the error with 
	exit status 4 and leaves no partial output, and that global and per-module option values are resolved correctly.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.msg = self.buildinfo(args=self.PRODUCT_PROPERTIES, shouldFail=True)
		self.assertThat('exitStatus == 4', exitStatus=self.lastExitStatus)
		self.buildinfo(stdouterr='options', args=self.PRODUCT_PROPERTIES+['--options'])

	def validate(self):
		self.assertThat('msg.startswith(expected)', msg=self.msg, expected='BUILDINFO FAILED: 1 error(s)')
		self.assertGrep('buildinfo.out', expr=r'<BuildInfoProp> buildinfo.prop : build.prop failed with return code 1 and no output generated')
		self.assertPathExists('build-output/intermediates/buildinfo.prop/buildinfo.prop', exists=False)
		self.assertPathExists('build-output/target/product/generic/system/buildinfo.prop', exists=False)

		self.assertGrep('options.out', expr=r'RuleBuilder.shell = sh$')
		self.assertGrep('options.out', expr=r'process.timeout = 60$')
		self.assertGrep('options.out', expr=r'BuildInfoProp.installable = None$')
