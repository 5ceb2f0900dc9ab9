# buildinfo - build-time properties file generator
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
The standard product configuration properties that make up the `buildinfo.buildcontext.BuildContext`.

Each standard property has a fixed type and default. A build file may define any of them itself (usually with
`buildinfo.propertysupport.definePropertiesFromFile`), and any it does not define are defined with the defaults
below when first used or once the build file has been loaded. A default of None means the value must be supplied
on the command line (or in a properties file).

=============================================  ===========  ==============================================
Property                                       Type         Default
=============================================  ===========  ==============================================
OUTPUT_DIR                                     output dir   ``out`` (relative to the build file)
LOG_FILE                                       path         ``${OUTPUT_DIR}/buildinfo.log``
PRODUCT_OUT                                    path         ``${OUTPUT_DIR}/target/product/generic``
KATI_ENABLED                                   boolean      true
TARGET_BUILD_VARIANT                           enumeration  user (one of user, userdebug, eng)
PLATFORM_SDK_VERSION                           integer      required
PLATFORM_PREVIEW_SDK_VERSION                   string       empty
PLATFORM_VERSION_CODENAME                      string       REL
PLATFORM_VERSION_ACTIVE_CODENAMES              list         empty
PLATFORM_VERSION_LAST_STABLE                   string       required
PLATFORM_VERSION                               string       last stable for REL, else the codename
PLATFORM_SECURITY_PATCH                        string       required
PLATFORM_BASE_OS                               string       empty
PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION      string       required
=============================================  ===========  ==============================================
"""

import logging

from buildinfo.propertysupport import defineOutputDirProperty, definePathProperty, defineBooleanProperty, \
	defineEnumerationProperty, defineIntegerProperty, defineStringProperty, defineListProperty
from buildinfo.buildcontext import getBuildInitializationContext

log = logging.getLogger('productconfig')

BUILD_VARIANTS = ['user', 'userdebug', 'eng']

def _releaseOrCodename():
	init = getBuildInitializationContext()
	codename = init.getPropertyValue('PLATFORM_VERSION_CODENAME')
	if codename == 'REL':
		return init.getPropertyValue('PLATFORM_VERSION_LAST_STABLE')
	return codename

# (name, define function, default); a callable default is evaluated when the property is defined
_STANDARD_PROPERTIES = [
	('OUTPUT_DIR', defineOutputDirProperty, 'out'),
	('LOG_FILE', definePathProperty, '${OUTPUT_DIR}/buildinfo.log'),
	('PRODUCT_OUT', definePathProperty, '${OUTPUT_DIR}/target/product/generic'),
	('KATI_ENABLED', defineBooleanProperty, True),
	('TARGET_BUILD_VARIANT', lambda name, default: defineEnumerationProperty(name, default, BUILD_VARIANTS), 'user'),
	('PLATFORM_SDK_VERSION', defineIntegerProperty, None),
	('PLATFORM_PREVIEW_SDK_VERSION', defineStringProperty, ''),
	('PLATFORM_VERSION_CODENAME', defineStringProperty, 'REL'),
	('PLATFORM_VERSION_ACTIVE_CODENAMES', defineListProperty, ''),
	('PLATFORM_VERSION_LAST_STABLE', defineStringProperty, None),
	('PLATFORM_VERSION', defineStringProperty, _releaseOrCodename),
	('PLATFORM_SECURITY_PATCH', defineStringProperty, None),
	('PLATFORM_BASE_OS', defineStringProperty, ''),
	('PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION', defineStringProperty, None),
]

STANDARD_PROPERTY_NAMES = [p[0] for p in _STANDARD_PROPERTIES]
""" The names of the standard product configuration properties, in definition order. """

def isStandardProperty(name):
	return name in STANDARD_PROPERTY_NAMES

def defineStandardProperty(name, value=None):
	""" Define the named standard property with its standard type.

	@param name: one of the `STANDARD_PROPERTY_NAMES`.
	@param value: the value to use instead of the standard default, for example from a properties file;
	command line and environment overrides still take precedence over it.
	@return: the value assigned to the property
	"""
	for (n, define, default) in _STANDARD_PROPERTIES:
		if n == name:
			if value is None:
				value = default
				# a derived default is only evaluated when nothing overrides it
				if callable(value):
					value = None if getBuildInitializationContext()._hasOverride(name) else value()
			log.debug('Defining standard property %s', name)
			return define(name, value)
	raise Exception('Not a standard product configuration property: %s'%name)
