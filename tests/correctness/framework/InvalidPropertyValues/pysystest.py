__pysys_title__   = r""" Properties - invalid values for typed product properties """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that values that cannot be converted to the type of a product property, such as an 
	unknown build variant or a non-integer SDK version, are reported as build errors.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.variant = self.buildinfo(stdouterr='variant', shouldFail=True, args=self.PRODUCT_PROPERTIES+['TARGET_BUILD_VARIANT=debug'])
		self.sdk = self.buildinfo(stdouterr='sdk', shouldFail=True, args=self.PRODUCT_PROPERTIES+['PLATFORM_SDK_VERSION=fourteen'])
		self.kati = self.buildinfo(stdouterr='kati', shouldFail=True, args=self.PRODUCT_PROPERTIES+['KATI_ENABLED=maybe'])

		# enumeration values are case-insensitive
		self.buildinfo(stdouterr='variant-case', args=self.PRODUCT_PROPERTIES+['TARGET_BUILD_VARIANT=ENG'])

	def validate(self):
		self.assertThat('expected in msg', msg=self.variant, 
			expected='Invalid property value for "TARGET_BUILD_VARIANT" - value "debug" is not one of the allowed enumeration values')
		self.assertThat('expected in msg', msg=self.sdk, 
			expected='Invalid property value for "PLATFORM_SDK_VERSION" - value "fourteen" must be an integer')
		self.assertThat('expected in msg', msg=self.kati, 
			expected='Invalid property value for "KATI_ENABLED" - must be true or false')
		self.assertGrep('build-output/intermediates/buildinfo.prop/buildinfo.prop', expr=r'^ro.build.type=eng$')
