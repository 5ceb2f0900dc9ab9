from buildinfo.propertysupport import *
from buildinfo.productconfig import defineStandardProperty
from buildinfo.modules.buildinfoprop import BuildInfoProp

assert defineStringProperty('MY_PROP', 'abc') == 'abc'
assert defineStringProperty('STR_PROP', '${MY_PROP}def') == 'abcdef'
assert defineBooleanProperty('BOOL_PROP', 'true') is True
assert defineIntegerProperty('INT_PROP', '${PLATFORM_SDK_VERSION}') == 34
assert defineListProperty('LIST_PROP', 'a, b c') == ['a', 'b', 'c']
assert defineEnumerationProperty('ENUM_PROP', 'Two', ['one', 'two']) == 'two'

assert os.path.exists(definePathProperty('PATH_PROP', '${OUTPUT_DIR}/..'))
assert os.path.isabs(getPropertyValue('PRODUCT_OUT'))

assert defineStandardProperty('PLATFORM_BASE_OS', 'base-${MY_PROP}') == 'base-abc'

BuildInfoProp('buildinfo.prop')
