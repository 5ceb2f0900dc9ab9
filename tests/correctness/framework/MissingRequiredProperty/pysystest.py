__pysys_title__   = r""" Properties - required product properties must be provided """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that the build fails with a clear message and exit status 5 if a product property 
	with no default is not set, and that nothing is generated.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		msg = self.buildinfo(shouldFail=True, args=[p for p in self.PRODUCT_PROPERTIES if not p.startswith('PLATFORM_SECURITY_PATCH=')])
		self.assertThat('exitStatus == 5', exitStatus=self.lastExitStatus)
		self.assertThat('expected in msg', msg=msg, expected='Property "PLATFORM_SECURITY_PATCH" must be set on the command line')

	def validate(self):
		self.assertPathExists('build-output/intermediates', exists=False)
