from buildinfo.propertysupport import *
from buildinfo.modules.buildinfoprop import BuildInfoProp

defineBooleanProperty('INSTALL_BUILDINFO', True)

BuildInfoProp('buildinfo.prop').option('BuildInfoProp.installable', '${INSTALL_BUILDINFO}')
