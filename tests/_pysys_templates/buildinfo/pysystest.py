@@DEFAULT_DESCRIPTOR@@

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='mytest', args=self.PRODUCT_PROPERTIES)

	def validate(self):
		self.assertGrep('build-output/intermediates/buildinfo.prop/buildinfo.prop', expr=r"XXX") # if no extra verifications are needed, instead use: self.addOutcome(PASSED)
