'''
XML helpers for the registrar's response documents.

Every response is parsed into an lxml element tree with the default
namespace removed, so the rest of the package can use bare tag names
(`CommandResponse/DomainCheckResult`) in `find` paths.
'''
from lxml import etree

from ncdomains.api._errors import ResponseShapeError


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
        huge_tree=False,
    )


def strip_namespaces(root: etree._Element) -> etree._Element:
    '''
    Rewrites every element tag of `root` to its local name in place.

    Parameters
    ----------
    root : etree._Element

    Returns
    -------
    etree._Element
    '''
    for element in root.iter():
        # comments and processing instructions carry a non-str tag
        if isinstance(element.tag, str) and element.tag.startswith('{'):
            element.tag = etree.QName(element).localname
    etree.cleanup_namespaces(root)
    return root


def parse_document(body: bytes) -> etree._Element:
    '''
    Parse a response body into a namespace-free element tree.

    Parameters
    ----------
    body : bytes

    Returns
    -------
    etree._Element

    Raises
    ------
    etree.XMLSyntaxError
        If the body is empty or not well formed.
    '''
    root = etree.fromstring(body, parser=_parser())
    return strip_namespaces(root)


def require(node: etree._Element, path: str, command: str | None = None) -> etree._Element:
    '''
    `node.find(path)` that raises instead of returning None.

    Raises
    ------
    ResponseShapeError
    '''
    found = node.find(path)
    if found is None:
        where = f' in {command} response' if command else ''
        raise ResponseShapeError(f'Missing <{path}>{where}')
    return found


def attr_bool(node: etree._Element, name: str) -> bool:
    return (node.get(name) or '').strip().lower() == 'true'


def child_text(node: etree._Element, path: str) -> str | None:
    found = node.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip()


def value_of(node: etree._Element, name: str) -> str | None:
    '''
    The registrar puts the same datum in an attribute for some commands
    and in a child element for others, read whichever is present.
    '''
    if (attr := node.get(name)) is not None:
        return attr
    return child_text(node, name)
