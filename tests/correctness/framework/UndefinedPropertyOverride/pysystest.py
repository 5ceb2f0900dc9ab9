__pysys_title__   = r""" Properties - overriding an undefined property is an error """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that a misspelt property on the command line fails the build rather than being 
	silently ignored, and that a non-property argument is a usage error.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		msg = self.buildinfo(stdouterr='misspelt', shouldFail=True, args=self.PRODUCT_PROPERTIES+['PLATFORM_SECURTY_PATCH=2024-01-01'])
		self.assertThat('exitStatus == 5', exitStatus=self.lastExitStatus)
		self.assertThat('expected in msg', msg=msg, expected='Cannot specify value for undefined build property/properties: PLATFORM_SECURTY_PATCH')

		self.buildinfo(stdouterr='usage', shouldFail=True, args=self.PRODUCT_PROPERTIES+['build'])
		self.assertThat('exitStatus == 2', exitStatus=self.lastExitStatus)

	def validate(self):
		self.assertGrep('usage.out', expr=r'Unexpected argument "build"; properties must be specified as PROPERTY=value')
		self.assertGrep('usage.out', expr=r'For help use --help')
