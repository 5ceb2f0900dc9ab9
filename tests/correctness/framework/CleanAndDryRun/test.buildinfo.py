from buildinfo.propertysupport import *
from buildinfo.modules.buildinfoprop import BuildInfoProp

BuildInfoProp('buildinfo.prop')
