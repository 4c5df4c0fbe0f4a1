"""Playground installers action for inspecting the plugin installer tracker."""

from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
)
from typing import cast, Any

from playground.client import KubectlClient, ObjectClient
from playground.config import KubeConfig, TrackerConfig
from playground.log import LogConfig
from playground.tracker import InstallerTracker, InstallerType

from .format import FORMATTERS, TableFormatter

UNTRACKED = "<untracked>"


def add_common_flags(args: ArgumentParser) -> None:
    """Add flags for reaching the cluster to the arguments object."""
    args.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to the kubeconfig file of the cluster",
    )
    args.add_argument(
        "--context",
        default=None,
        help="The kubeconfig context to use",
    )
    args.add_argument(
        "--request-timeout",
        default=None,
        help="Timeout passed to kubectl for each request (e.g. 10s)",
    )


def build_client(
    log_config: LogConfig,
    kubeconfig: str | None,
    context: str | None,
    request_timeout: str | None,
) -> ObjectClient:
    """Create the client used to reach the cluster."""
    return KubectlClient.from_kubeconfig(
        KubeConfig(
            kubeconfig=kubeconfig, context=context, request_timeout=request_timeout
        ),
        log_config,
    )


def build_tracker(log_config: LogConfig, **kwargs: Any) -> InstallerTracker:
    """Create an InstallerTracker from the common flags."""
    client = build_client(
        log_config,
        kwargs.get("kubeconfig"),
        kwargs.get("context"),
        kwargs.get("request_timeout"),
    )
    return InstallerTracker(client, TrackerConfig(), log_config)


class RecordAction:
    """Record the installer of a plugin."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "record",
                help="Record the installer of a plugin",
                description="Record which installer installed a plugin in the cluster",
            ),
        )
        args.add_argument("plugin", help="Name of the plugin")
        args.add_argument(
            "installer",
            choices=[str(t) for t in InstallerType],
            help="The installer that installed the plugin",
        )
        add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        log_config: LogConfig,
        plugin: str,
        installer: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        tracker = build_tracker(log_config, **kwargs)
        await tracker.record(plugin, installer)
        print(f"Recorded installer '{installer}' for plugin '{plugin}'")


class GetAction:
    """Print the installer of a plugin."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print the installer of a plugin",
                description="Print which installer installed a plugin in the cluster",
            ),
        )
        args.add_argument("plugin", help="Name of the plugin")
        add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        log_config: LogConfig,
        plugin: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        tracker = build_tracker(log_config, **kwargs)
        installer = await tracker.get_installer(plugin)
        TableFormatter(["plugin", "installer"]).print(
            [{"plugin": plugin, "installer": installer or UNTRACKED}]
        )


class ListAction:
    """List tracked plugins."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "list",
                aliases=["ls"],
                help="List tracked plugins",
                description="List the plugins with a recorded installer",
            ),
        )
        args.add_argument(
            "--installer",
            choices=[str(t) for t in InstallerType],
            default=None,
            help="Only list plugins installed by this installer",
        )
        args.add_argument(
            "--output",
            "-o",
            choices=list(FORMATTERS),
            default="table",
            help="Output format of the command",
        )
        add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        log_config: LogConfig,
        installer: str | None,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        tracker = build_tracker(log_config, **kwargs)
        if installer:
            plugins = await tracker.list_by_installer(installer)
            data = {plugin: installer for plugin in plugins}
        else:
            data = await tracker.list_all()

        results = [
            {"plugin": plugin, "installer": data[plugin]} for plugin in sorted(data)
        ]
        if not results and output == "table":
            print("No tracked plugins found")
            return
        FORMATTERS[output]().print(results)


class RemoveAction:
    """Remove the installer record of a plugin."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "remove",
                aliases=["rm"],
                help="Remove the installer record of a plugin",
                description="Forget which installer installed a plugin in the cluster",
            ),
        )
        args.add_argument("plugin", help="Name of the plugin")
        add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        log_config: LogConfig,
        plugin: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        tracker = build_tracker(log_config, **kwargs)
        await tracker.remove(plugin)
        print(f"Removed installer record for plugin '{plugin}'")


class InstallersAction:
    """Playground installers action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "installers",
                help="Inspect and update the plugin installer tracker",
                description="Track which installer installed each plugin in a cluster",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        RecordAction.register(subcmds)
        GetAction.register(subcmds)
        ListAction.register(subcmds)
        RemoveAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
