"""Setup workflow orchestration."""

from stackguard.workflow.precommit_setup import PrecommitSetup, SetupConfig, SetupResult

__all__ = ["PrecommitSetup", "SetupConfig", "SetupResult"]
