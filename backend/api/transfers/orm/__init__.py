from api.transfers.orm.transfer_model import TransferFileModel, TransferModel

__all__ = ["TransferFileModel", "TransferModel"]
