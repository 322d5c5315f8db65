"""Labelled exemplar phrases the default classifier is trained on."""

CIVIL = "CIVIL"
CRIMINAL = "CRIMINAL"
FAMILY = "FAMILY"
BANKRUPTCY = "BANKRUPTCY"

LABELS: tuple[str, ...] = (CIVIL, CRIMINAL, FAMILY, BANKRUPTCY)

DEFAULT_CORPUS: tuple[tuple[str, str], ...] = (
    ("civil court case complaint damages", CIVIL),
    ("plaintiff seeks monetary damages breach of contract negligence", CIVIL),
    ("civil action summons complaint tort liability", CIVIL),
    ("criminal case prosecution defendant", CRIMINAL),
    ("the people charge the accused with felony indictment", CRIMINAL),
    ("criminal complaint arrest warrant sentencing plea", CRIMINAL),
    ("family court custody divorce", FAMILY),
    ("petition for dissolution of marriage child support visitation", FAMILY),
    ("custody of the minor child spousal support alimony", FAMILY),
    ("bankruptcy petition chapter", BANKRUPTCY),
    ("debtor creditors trustee discharge of debts", BANKRUPTCY),
    ("chapter 7 chapter 11 chapter 13 bankruptcy estate liquidation", BANKRUPTCY),
)
