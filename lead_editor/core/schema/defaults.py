"""
Built-in field tables for the three editable entities.

Column names follow the lead_room, lead_room_type and lead_property tables.
"""

ROOM_STATUS_OPTIONS = [
    "", "A", "B", "C", "D", "E", "F", "クローズ", "運営判断中",
    "試算入力待ち", "試算入力済み", "試算依頼済み", "他決", "見送り",
]

VACATE_SETUP_OPTIONS = ["", "一般賃貸中", "退去SU"]

ROOM_FIELDS = [
    {"name": "id", "kind": "text", "label": "部屋ID", "order": 1, "editable": False},
    {"name": "status", "kind": "select", "label": "進捗", "order": 2, "options": ROOM_STATUS_OPTIONS},
    {"name": "name", "kind": "text", "label": "部屋名", "order": 3, "editable": False, "required": True},
    {"name": "room_number", "kind": "text", "label": "部屋番号", "order": 4, "required": True},
    {"name": "lead_property_id", "kind": "text", "label": "建物ID", "order": 5, "editable": False},
    {"name": "lead_room_type_id", "kind": "text", "label": "部屋タイプID", "order": 6},
    {"name": "create_date", "kind": "date", "label": "部屋登録日", "order": 7, "editable": False},
    {"name": "key_handover_scheduled_date", "kind": "date", "label": "鍵引き渡し予定日", "order": 8},
    {"name": "possible_key_handover_scheduled_date_1", "kind": "date", "label": "鍵引き渡し予定日①", "order": 9},
    {"name": "possible_key_handover_scheduled_date_2", "kind": "date", "label": "鍵引き渡し予定日②", "order": 10},
    {"name": "possible_key_handover_scheduled_date_3", "kind": "date", "label": "鍵引き渡し予定日③", "order": 11},
    {"name": "vacate_setup", "kind": "select", "label": "退去SU", "order": 12, "options": VACATE_SETUP_OPTIONS},
    {"name": "contract_collection_date", "kind": "date", "label": "契約書回収予定日", "order": 13},
    {"name": "application_intended_date", "kind": "date", "label": "申請予定日", "order": 14},
    {"name": "leaflet_distribution_date", "kind": "date", "label": "チラシ配布日", "order": 15},
    {"name": "notification_complete_date", "kind": "date", "label": "通知完了日", "order": 16},
]

ROOM_TYPE_FIELDS = [
    {"name": "id", "kind": "text", "label": "部屋タイプID", "order": 1, "editable": False},
    {"name": "status", "kind": "select", "label": "進捗", "order": 2},
    {"name": "name", "kind": "text", "label": "部屋タイプ名", "order": 3, "required": True},
    {"name": "room_type_number", "kind": "text", "label": "部屋タイプ番号", "order": 4},
    {"name": "lead_property_id", "kind": "text", "label": "建物ID", "order": 5, "editable": False},
    {"name": "floor_plan", "kind": "text", "label": "間取り", "order": 6},
    {"name": "floor_area", "kind": "numeric", "label": "専有面積（㎡）", "order": 7},
    {"name": "balcony_area", "kind": "numeric", "label": "バルコニー面積（㎡）", "order": 8},
    {"name": "minpaku_price", "kind": "numeric", "label": "民泊単価", "order": 9},
    {"name": "monthly_price", "kind": "numeric", "label": "マンスリー単価", "order": 10},
    {"name": "pax", "kind": "numeric", "label": "収容人数", "order": 11},
    {"name": "rent", "kind": "numeric", "label": "家賃（円）", "order": 12},
    {"name": "common_area_fee", "kind": "numeric", "label": "共益費（円）", "order": 13},
    {"name": "security_deposit", "kind": "numeric", "label": "敷金（円）", "order": 14},
    {"name": "key_money", "kind": "numeric", "label": "礼金（円）", "order": 15},
    {"name": "orientation", "kind": "text", "label": "方位", "order": 16},
    {"name": "nearest_station", "kind": "text", "label": "最寄り駅", "order": 17},
    {"name": "walk_time_to_station", "kind": "numeric", "label": "駅徒歩時間（分）", "order": 18},
    {"name": "facilities", "kind": "text", "label": "設備", "order": 19},
    {"name": "building_age", "kind": "numeric", "label": "築年数", "order": 20},
    {"name": "building_structure", "kind": "text", "label": "構造", "order": 21},
    {"name": "floor_level", "kind": "numeric", "label": "階数", "order": 22},
    {"name": "create_date", "kind": "date", "label": "作成日", "order": 23, "editable": False},
    {"name": "remarks", "kind": "text", "label": "備考", "order": 24},
]

PROPERTY_FIELDS = [
    {"name": "id", "kind": "text", "label": "物件ID", "order": 1, "editable": False},
    {"name": "name", "kind": "text", "label": "建物名", "order": 2, "required": True},
    {"name": "tag", "kind": "text", "label": "タグ", "order": 3},
    {"name": "is_trade", "kind": "select", "label": "売買", "order": 4},
    {"name": "is_lease", "kind": "select", "label": "賃貸", "order": 5},
    {"name": "lead_from", "kind": "text", "label": "仕入元", "order": 6},
    {"name": "is_fund", "kind": "select", "label": "ファンド", "order": 7},
    {"name": "lead_channel", "kind": "select", "label": "仕入経路", "order": 8},
    {"name": "trade_form", "kind": "select", "label": "取引態様", "order": 9},
    {"name": "lead_from_representative", "kind": "text", "label": "仕入元担当者", "order": 10},
    {"name": "lead_from_representative_phone", "kind": "text", "label": "仕入元担当者電話番号", "order": 11},
    {"name": "lead_from_representative_email", "kind": "text", "label": "仕入元担当者メール", "order": 12},
    {"name": "folder", "kind": "text", "label": "フォルダ", "order": 13},
    {"name": "serial_number", "kind": "text", "label": "シリアル番号", "order": 14},
    {"name": "note", "kind": "text", "label": "備考", "order": 15},
    {"name": "mt_representative", "kind": "text", "label": "MT担当者", "order": 16},
    {"name": "create_date", "kind": "date", "label": "登録日", "order": 17, "editable": False},
    {"name": "information_acquisition_date", "kind": "date", "label": "情報取得日", "order": 18},
    {"name": "latest_inventory_confirmation_date", "kind": "date", "label": "最新在庫確認日", "order": 19},
    {"name": "num_of_occupied_rooms", "kind": "numeric", "label": "入居中部屋数", "order": 20},
    {"name": "num_of_vacant_rooms", "kind": "numeric", "label": "空室数", "order": 21},
    {"name": "num_of_rooms_without_furniture", "kind": "numeric", "label": "家具なし部屋数", "order": 22},
    {"name": "minpaku_feasibility", "kind": "select", "label": "民泊可否", "order": 23},
    {"name": "sp_feasibility", "kind": "select", "label": "SP可否", "order": 24},
    {"name": "done_property_viewing", "kind": "select", "label": "内見済み", "order": 25},
    {"name": "torikago", "kind": "select", "label": "鳥かご", "order": 26},
    {"name": "key_handling_date", "kind": "date", "label": "鍵取扱日", "order": 27},
    {"name": "done_antisocial_check", "kind": "select", "label": "反社チェック済み", "order": 28},
]

DEFAULT_SCHEMAS = {
    "room": ROOM_FIELDS,
    "room_type": ROOM_TYPE_FIELDS,
    "property": PROPERTY_FIELDS,
}
