"""TMX 1.4 element and attribute names."""

TMX_VERSION = "1.4"

TMX = "tmx"
HEADER = "header"
BODY = "body"
TU = "tu"
TUV = "tuv"
NOTE = "note"
PROP = "prop"

XML_LANG = "xml:lang"
PROP_TYPE = "type"

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
