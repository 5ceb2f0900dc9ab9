from buildinfo.propertysupport import *
from buildinfo.modules.buildinfoprop import BuildInfoProp

setGlobalOption('process.timeout', 60)

# a "shell" that always fails without running the command
BuildInfoProp('buildinfo.prop').option('RuleBuilder.shell', 'false')
