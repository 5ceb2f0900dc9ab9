from buildinfo.propertysupport import *
from buildinfo.modules.buildinfoprop import BuildInfoProp

definePropertiesFromFile('product.properties', conditions=[getPropertyValue('TARGET_BUILD_VARIANT'), 'arm64'])

BuildInfoProp('buildinfo.prop')
