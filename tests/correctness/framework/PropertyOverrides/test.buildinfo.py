from buildinfo.propertysupport import *
from buildinfo.modules.buildinfoprop import BuildInfoProp

definePropertiesFromFile('product.properties')
defineStringProperty('MY_LABEL', 'default-label')

BuildInfoProp('buildinfo.prop')
