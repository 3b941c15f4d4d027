class VpcTagError(RuntimeError):
    """
    Erro fatal do vpctag: aborta a operação inteira (crawl, plan ou apply).
    Erros por recurso/mudança NÃO usam essa hierarquia, ficam no resultado.
    """


class ResourceNotFoundError(VpcTagError):
    pass


class ServiceResolutionError(VpcTagError):
    pass


class UnsupportedServiceError(VpcTagError):
    pass


class TagSpecificationError(VpcTagError):
    pass


class TagPlanFileError(VpcTagError):
    pass
