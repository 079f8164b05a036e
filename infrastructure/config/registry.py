from pydantic import BaseModel

from domain.kernels import GaussianKernel, Kernel, LinearKernel, PolynomialKernel
from domain.machines import KernelRidgeClassifier, KernelRidgeRegression, Machine, MultitaskKernelRidgeRegression

from .models import GaussianKernelParams, KernelType, LinearKernelParams, MachineType, PolynomialKernelParams

# KernelType -> params config model
# Add future kernels here (and in KERNEL_CLASS_BY_TYPE)
PARAM_MODEL_BY_KERNEL: dict[KernelType, type[BaseModel]] = {
    KernelType.LINEAR: LinearKernelParams,
    KernelType.GAUSSIAN: GaussianKernelParams,
    KernelType.POLYNOMIAL: PolynomialKernelParams,
}

# KernelType -> kernel class (constructor kwargs == params model fields)
KERNEL_CLASS_BY_TYPE: dict[KernelType, type[Kernel]] = {
    KernelType.LINEAR: LinearKernel,
    KernelType.GAUSSIAN: GaussianKernel,
    KernelType.POLYNOMIAL: PolynomialKernel,
}

MACHINE_CLASS_BY_TYPE: dict[MachineType, type[Machine]] = {
    MachineType.MULTITASK_KRR: MultitaskKernelRidgeRegression,
    MachineType.KRR: KernelRidgeRegression,
    MachineType.KRR_CLASSIFIER: KernelRidgeClassifier,
}
