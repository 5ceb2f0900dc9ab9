__pysys_title__   = r""" Modules - only one BuildInfoProp per build """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that declaring a second BuildInfoProp module fails while the build file is loaded.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.msg = self.buildinfo(args=self.PRODUCT_PROPERTIES, shouldFail=True)
		self.assertThat('exitStatus == 5', exitStatus=self.lastExitStatus)

	def validate(self):
		self.assertThat('expected in msg', msg=self.msg, 
			expected='Only one BuildInfoProp module can be defined per build, but found "buildinfo.prop" and "another.prop"')
		self.assertPathExists('build-output/intermediates', exists=False)
