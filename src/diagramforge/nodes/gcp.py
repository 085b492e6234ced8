"""Google Cloud Platform icon families."""

from ..diagram.node import Node
from ..diagram.options import NodeOption, OptionSet, icon, merge_option_sets, node_shape, provider


class _Family:
    """Nodes sharing a provider, a shape override and an icon directory."""

    def __init__(self, path: str, opts: OptionSet):
        self.path = path
        self.opts = opts

    def _new(self, asset: str, opts: tuple[NodeOption, ...]) -> Node:
        return Node(*merge_option_sets([icon(f"{self.path}/{asset}")], self.opts, opts))

    def kinds(self) -> list[str]:
        """Names of the node constructors this family offers."""
        return sorted(
            attr for attr in dir(self)
            if not attr.startswith("_") and attr != "kinds" and callable(getattr(self, attr))
        )


class _Api(_Family):
    def endpoints(self, *opts: NodeOption) -> Node:
        return self._new("endpoints.png", opts)

    def apigee(self, *opts: NodeOption) -> Node:
        return self._new("apigee.png", opts)

    def api_gateway(self, *opts: NodeOption) -> Node:
        return self._new("api-gateway.png", opts)


api = _Api("assets/gcp/api", [provider("gcp"), node_shape("none")])

FAMILIES = {
    "api": api,
}
