from PIL import Image, ImageDraw, ImageFont
import os

from services import format_money

STORE_NAME = "Simple Store"


class ReceiptGenerator:
    @staticmethod
    def _load_font(size):
        # Try common system fonts, fallback to default
        candidates = ["arial.ttf", "DejaVuSans.ttf", "LiberationSans-Regular.ttf"]
        for f in candidates:
            try:
                return ImageFont.truetype(f, size)
            except OSError:
                continue
        return ImageFont.load_default()

    @staticmethod
    def _file_name(receipt):
        return f"receipt-{receipt.date.strftime('%Y%m%d-%H%M%S-%f')}.png"

    @staticmethod
    def generate(receipt, receipts_dir=None):
        """Render a checked-out receipt as a PNG and return the png path."""
        if receipts_dir is None:
            receipts_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'receipts')
        os.makedirs(receipts_dir, exist_ok=True)
        png_path = os.path.join(receipts_dir, ReceiptGenerator._file_name(receipt))

        # Layout: compute height based on number of items
        width = 800
        header_h = 140
        line_h = 28
        footer_h = 120

        # Use a temporary draw object to measure wrapping
        tmp_img = Image.new('RGB', (1, 1))
        tmp_draw = ImageDraw.Draw(tmp_img)

        def text_size(draw_obj, text, font):
            bbox = draw_obj.textbbox((0, 0), text, font=font)
            return (bbox[2] - bbox[0], bbox[3] - bbox[1])

        # Wrap text to fit within max_w using the provided font
        def wrap_text(draw_obj, text, font, max_w):
            words = (text or '').split()
            if not words:
                return ['']
            lines = []
            cur = words[0]
            for w in words[1:]:
                tw, th = text_size(draw_obj, cur + ' ' + w, font)
                if tw <= max_w:
                    cur = cur + ' ' + w
                else:
                    lines.append(cur)
                    cur = w
            lines.append(cur)
            return lines

        f_head = ReceiptGenerator._load_font(28)
        f_body = ReceiptGenerator._load_font(14)
        f_mono = ReceiptGenerator._load_font(12)

        x = 40
        y = 30

        # Column positions, amounts are right-aligned
        right_boundary = width - x
        col_total_right = right_boundary - 20
        col_price_right = col_total_right - 120
        col_qty_center = col_price_right - 60
        item_col_w = max(80, int(col_qty_center - x) - 12)

        prepared_items = []
        total_items_height = 0
        for it in receipt.items:
            lines = wrap_text(tmp_draw, it.product.name, f_mono, item_col_w)
            h = len(lines) * line_h + 6
            total_items_height += h
            prepared_items.append({
                'lines': lines,
                'quantity': str(it.quantity),
                'price': f"{it.product.price:,.2f}",
                'total': f"{it.line_total:,.2f}",
            })

        items_h = max(120, total_items_height + 20)
        height = header_h + items_h + footer_h

        img = Image.new('RGB', (width, height), color=(255, 255, 255))
        draw = ImageDraw.Draw(img)

        # Header
        draw.text((x, y), STORE_NAME, font=f_head, fill=(20, 20, 20))
        y += 44
        draw.text((x, y), f"Date: {receipt.date.strftime('%Y-%m-%d %H:%M:%S')}", font=f_body, fill=(0, 0, 0))
        y += 30

        draw.line((x, y, right_boundary, y), fill=(200, 200, 200), width=1)
        y += 12

        draw.text((x, y), "Item", font=f_mono, fill=(0, 0, 0))
        tw_q, _ = text_size(draw, "Qty", f_mono)
        draw.text((col_qty_center - tw_q / 2, y), "Qty", font=f_mono, fill=(0, 0, 0))
        tw_p, _ = text_size(draw, "Price", f_mono)
        draw.text((col_price_right - tw_p, y), "Price", font=f_mono, fill=(0, 0, 0))
        tw_t, _ = text_size(draw, "Total", f_mono)
        draw.text((col_total_right - tw_t, y), "Total", font=f_mono, fill=(0, 0, 0))
        y += 18
        draw.line((x, y, right_boundary, y), fill=(230, 230, 230), width=1)
        y += 8

        for itm in prepared_items:
            first_line = True
            for ln in itm['lines']:
                draw.text((x, y), ln, font=f_mono, fill=(20, 20, 20))
                if first_line:
                    qw, _ = text_size(draw, itm['quantity'], f_mono)
                    draw.text((col_qty_center - qw / 2, y), itm['quantity'], font=f_mono, fill=(20, 20, 20))
                    pw, _ = text_size(draw, itm['price'], f_mono)
                    draw.text((col_price_right - pw, y), itm['price'], font=f_mono, fill=(20, 20, 20))
                    iw, _ = text_size(draw, itm['total'], f_mono)
                    draw.text((col_total_right - iw, y), itm['total'], font=f_mono, fill=(20, 20, 20))
                    first_line = False
                y += line_h
            draw.line((x, y, right_boundary, y), fill=(245, 245, 245), width=1)
            y += 6

        # Footer: grand total right-aligned, thank-you line below
        footer_top = max(header_h + items_h, y + 12)
        total_txt = f"Total: {format_money(receipt.total)}"
        twt, _ = text_size(draw, total_txt, f_body)
        draw.text((col_total_right - twt, footer_top), total_txt, font=f_body, fill=(0, 100, 0))
        draw.text((x, footer_top + line_h * 2), f"Thank you for shopping at {STORE_NAME}!", font=f_body, fill=(80, 80, 80))

        img.save(png_path)
        return png_path
