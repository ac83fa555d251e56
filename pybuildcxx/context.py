from dataclasses import dataclass
from pathlib import Path

from returns.io import IOResultE, IOSuccess

from pybuildcxx.args import ArgsConfig
from pybuildcxx.config import Config, config_load, fallback_config
from pybuildcxx.targets import BuildRequest


@dataclass
class Context:
    args: ArgsConfig
    config: Config
    project: Path
    output: Path
    request: BuildRequest

    @property
    def name(self) -> str:
        return self.config["project"]["name"]

    def log(self, message: str):
        print(f"[pybuildcxx] {message}")

    def debug(self, message: str):
        if self.args.verbose:
            print(message)


def resolve_features(config: Config, args: ArgsConfig) -> dict[str, bool]:
    features = dict(config["features"])
    features.update({name: True for name in getattr(args, "feature", ())})
    features.update({name: False for name in getattr(args, "no_feature", ())})
    return features


def create_request(config: Config, args: ArgsConfig) -> BuildRequest:
    quick = getattr(args, "quick", False)
    return BuildRequest(
        quick=quick,
        quick_target=getattr(args, "target", None) if quick else None,
        debug=getattr(args, "debug", False),
        define=getattr(args, "define", None),
        features=resolve_features(config, args),
    )


def context_load(args: ArgsConfig) -> IOResultE[Context]:
    project = Path(args.dir)
    config = config_load(project)
    if args.action == "clean":
        # clean only needs the output directory
        config = config.lash(lambda _: IOSuccess(fallback_config(project)))
    return config.map(
        lambda config: Context(
            args=args,
            config=config,
            project=project,
            output=Path(args.build_dir)
            if args.build_dir
            else project / config["project"]["build_dir"],
            request=create_request(config, args),
        )
    )
