"""Factories turning a RunConfig into kernels, machines and converters."""

import logging

from domain.converters import LocalityPreservingProjections
from domain.kernels import Kernel
from domain.machines import Machine, MultitaskKernelRidgeRegression
from infrastructure.config.loader import bind_kernel_params
from infrastructure.config.models import RunConfig
from infrastructure.config.registry import KERNEL_CLASS_BY_TYPE, MACHINE_CLASS_BY_TYPE

logger = logging.getLogger(__name__)


def make_kernel(cfg: RunConfig) -> Kernel:
    """
    Create the configured kernel (unbound, identity normalizer).

    Raises:
        RuntimeError: If no kernel class is registered for the configured type
        ValueError: If the kernel params are invalid
    """
    kernel_cls = KERNEL_CLASS_BY_TYPE.get(cfg.kernel.type)
    if kernel_cls is None:
        raise RuntimeError(f"No kernel class registered for kernel='{cfg.kernel.type.value}'.")
    params = bind_kernel_params(cfg.kernel)
    return kernel_cls(**params.model_dump())


def make_machine(cfg: RunConfig) -> Machine:
    """
    Factory function to create the configured machine.

    The multitask machine additionally receives the resolved taxonomy.
    """
    machine_cls = MACHINE_CLASS_BY_TYPE.get(cfg.model.machine)
    if machine_cls is None:
        raise RuntimeError(f"No machine class registered for machine='{cfg.model.machine.value}'.")

    kernel = make_kernel(cfg)
    logger.info(
        "Creating machine=%s with kernel=%s params=%s tau=%g",
        cfg.model.machine.value,
        cfg.kernel.type.value,
        cfg.kernel.params,
        cfg.model.tau,
    )
    if issubclass(machine_cls, MultitaskKernelRidgeRegression):
        return machine_cls(kernel=kernel, taxonomy=cfg.taxonomy, tau=cfg.model.tau)
    return machine_cls(kernel=kernel, tau=cfg.model.tau)  # type: ignore[call-arg]


def make_converter(cfg: RunConfig) -> LocalityPreservingProjections:
    emb = cfg.embedding
    return LocalityPreservingProjections(target_dim=emb.target_dim, k=emb.k, width=emb.width, n_jobs=emb.n_jobs)
